"""
Unit tests for the lm-sensors reader.
"""

from unittest.mock import patch

import pytest

from pemon.errors import ErrorKind, SensorReadError
from pemon.models.config import DEFAULT_SENSOR_LABELS
from pemon.models.samples import SensorReading
from pemon.collectors.lm_sensors import (
    LmSensorsReader,
    parse_rpm,
    parse_sensors_output,
    parse_temperature,
)

SENSORS_OUTPUT = """\
it8665-isa-0290
Adapter: ISA adapter
in0:          +1.03 V  (min =  +0.00 V, max =  +3.06 V)
CPU Fan:               1180 RPM  (min =    0 RPM)
Chassis Fan 1:          812 RPM  (min =    0 RPM)
CPU Temperature:        +45.0°C  (low  = +127.0°C, high = +127.0°C)
Motherboard Temperature: +32.5°C  (low  = +127.0°C, high = +127.0°C)
Chipset Temperature:    +50.9°C  (low  = +127.0°C, high = +127.0°C)

acpitz-acpi-0
Adapter: ACPI interface
CPU Temperature:        +99.0°C
"""


@pytest.mark.unit
class TestValueParsers:
    @pytest.mark.parametrize(
        "raw, expected",
        [("+45.0°C", 45), ("45°C", 45), ("+50.9°C  (high = +80.0°C)", 50), ("  +0.0°C", 0)],
    )
    def test_parse_temperature(self, raw, expected):
        assert parse_temperature(raw) == expected

    @pytest.mark.parametrize("raw", ["N/A", "", "°C"])
    def test_parse_temperature_illegal(self, raw):
        with pytest.raises(ValueError):
            parse_temperature(raw)

    def test_parse_temperature_negative(self):
        with pytest.raises(ValueError, match="negative"):
            parse_temperature("-5.0°C")

    def test_parse_rpm(self):
        assert parse_rpm("  1180 RPM  (min = 0 RPM)") == 1180

    @pytest.mark.parametrize("raw", ["1180", "fast RPM", "-3 RPM"])
    def test_parse_rpm_illegal(self, raw):
        with pytest.raises(ValueError):
            parse_rpm(raw)


@pytest.mark.unit
class TestParseSensorsOutput:
    def test_parses_all_fields(self):
        reading = parse_sensors_output(SENSORS_OUTPUT, DEFAULT_SENSOR_LABELS)

        assert reading == SensorReading(
            cpu_temp=45,
            motherboard_temp=32,
            chipset_temp=50,
            cpu_fan_rpm=1180,
            chassis_fan_rpm=812,
        )

    def test_first_occurrence_wins(self):
        reading = parse_sensors_output(SENSORS_OUTPUT, DEFAULT_SENSOR_LABELS)

        assert reading.cpu_temp == 45

    def test_custom_labels(self):
        output = SENSORS_OUTPUT.replace("Chassis Fan 1", "SYS_FAN2")
        labels = dict(DEFAULT_SENSOR_LABELS, chassis_fan="SYS_FAN2")

        assert parse_sensors_output(output, labels).chassis_fan_rpm == 812

    def test_missing_label(self):
        output = SENSORS_OUTPUT.replace("Chipset Temperature", "PCH Temperature")

        with pytest.raises(SensorReadError) as exc_info:
            parse_sensors_output(output, DEFAULT_SENSOR_LABELS)

        assert "Chipset Temperature" in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.COLLABORATOR

    def test_unparseable_value(self):
        output = SENSORS_OUTPUT.replace("1180 RPM", "N/A")

        with pytest.raises(SensorReadError):
            parse_sensors_output(output, DEFAULT_SENSOR_LABELS)


@pytest.mark.unit
class TestLmSensorsReader:
    def test_read_runs_command(self):
        reader = LmSensorsReader(DEFAULT_SENSOR_LABELS)

        with patch("pemon.collectors.lm_sensors.run_command",
                   return_value=(0, SENSORS_OUTPUT, "")) as mock_run:
            reading = reader.read()

        mock_run.assert_called_once_with(["sensors"])
        assert reading.cpu_fan_rpm == 1180

    def test_non_zero_exit(self):
        reader = LmSensorsReader(DEFAULT_SENSOR_LABELS)

        with patch("pemon.collectors.lm_sensors.run_command",
                   return_value=(1, "", "No sensors found!")):
            with pytest.raises(SensorReadError, match="No sensors found"):
                reader.read()

    def test_missing_command(self):
        reader = LmSensorsReader(DEFAULT_SENSOR_LABELS, command="sensors")

        with patch("pemon.collectors.lm_sensors.check_tool_installed", return_value=False):
            with pytest.raises(SensorReadError, match="not installed"):
                reader.check_available()

    def test_installed_command(self):
        reader = LmSensorsReader(DEFAULT_SENSOR_LABELS)

        with patch("pemon.collectors.lm_sensors.check_tool_installed", return_value=True):
            reader.check_available()
