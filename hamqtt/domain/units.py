"""Units of measurement understood by Home Assistant, grouped by quantity."""

from enum import Enum


class PercentageUnit(str, Enum):
    PERCENTAGE = "%"


class TemperatureUnit(str, Enum):
    CELSIUS = "°C"
    FAHRENHEIT = "°F"
    KELVIN = "K"


class PowerUnit(str, Enum):
    MILLIWATT = "mW"
    WATT = "W"
    KILOWATT = "kW"
    MEGAWATT = "MW"
    GIGAWATT = "GW"
    TERAWATT = "TW"
    BTU_PER_HOUR = "BTU/h"


class ApparentPowerUnit(str, Enum):
    VOLT_AMPERE = "VA"


class ReactivePowerUnit(str, Enum):
    VOLT_AMPERE_REACTIVE = "var"


class EnergyUnit(str, Enum):
    JOULE = "J"
    KILO_JOULE = "kJ"
    MEGA_JOULE = "MJ"
    GIGA_JOULE = "GJ"
    MILLIWATT_HOUR = "mWh"
    WATT_HOUR = "Wh"
    KILO_WATT_HOUR = "kWh"
    MEGA_WATT_HOUR = "MWh"
    GIGA_WATT_HOUR = "GWh"
    TERA_WATT_HOUR = "TWh"
    CALORIE = "cal"
    KILO_CALORIE = "kcal"
    MEGA_CALORIE = "Mcal"
    GIGA_CALORIE = "Gcal"


class VoltageUnit(str, Enum):
    MICROVOLT = "µV"
    MILLIVOLT = "mV"
    VOLT = "V"
    KILOVOLT = "kV"
    MEGAVOLT = "MV"


class CurrentUnit(str, Enum):
    MILLIAMPERE = "mA"
    AMPERE = "A"


class FrequencyUnit(str, Enum):
    HERTZ = "Hz"
    KILOHERTZ = "kHz"
    MEGAHERTZ = "MHz"
    GIGAHERTZ = "GHz"


class PressureUnit(str, Enum):
    PA = "Pa"
    HPA = "hPa"
    KPA = "kPa"
    BAR = "bar"
    CBAR = "cbar"
    MBAR = "mbar"
    MMHG = "mmHg"
    INHG = "inHg"
    PSI = "psi"


class TimeUnit(str, Enum):
    MICROSECONDS = "μs"
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "min"
    HOURS = "h"
    DAYS = "d"
    WEEKS = "w"
    MONTHS = "m"
    YEARS = "y"


class LengthUnit(str, Enum):
    MILLIMETERS = "mm"
    CENTIMETERS = "cm"
    METERS = "m"
    KILOMETERS = "km"
    INCHES = "in"
    FEET = "ft"
    YARDS = "yd"
    MILES = "mi"


class VolumeUnit(str, Enum):
    LITERS = "L"
    MILLILITERS = "mL"
    CUBIC_METERS = "m³"
    CUBIC_FEET = "ft³"
    CENTUM_CUBIC_FEET = "CCF"
    GALLONS = "gal"
    FLUID_OUNCES = "fl. oz."


class MassUnit(str, Enum):
    GRAMS = "g"
    KILOGRAMS = "kg"
    MILLIGRAMS = "mg"
    MICROGRAMS = "µg"
    OUNCES = "oz"
    POUNDS = "lb"
    STONES = "st"


class SpeedUnit(str, Enum):
    FEET_PER_SECOND = "ft/s"
    INCHES_PER_DAY = "in/d"
    INCHES_PER_HOUR = "in/h"
    KILOMETERS_PER_HOUR = "km/h"
    KNOTS = "kn"
    METERS_PER_SECOND = "m/s"
    MILES_PER_HOUR = "mph"
    MILLIMETERS_PER_DAY = "mm/d"
    MILLIMETERS_PER_SECOND = "mm/s"


class PrecipitationIntensityUnit(str, Enum):
    INCHES_PER_DAY = "in/d"
    INCHES_PER_HOUR = "in/h"
    MILLIMETERS_PER_DAY = "mm/d"
    MILLIMETERS_PER_HOUR = "mm/h"


class DataSizeUnit(str, Enum):
    BITS = "bit"
    KILOBITS = "kbit"
    MEGABITS = "Mbit"
    GIGABITS = "Gbit"
    BYTES = "B"
    KILOBYTES = "kB"
    MEGABYTES = "MB"
    GIGABYTES = "GB"
    TERABYTES = "TB"
    PETABYTES = "PB"
    KIBIBYTES = "KiB"
    MEBIBYTES = "MiB"
    GIBIBYTES = "GiB"
    TEBIBYTES = "TiB"


class DataRateUnit(str, Enum):
    BITS_PER_SECOND = "bit/s"
    KILOBITS_PER_SECOND = "kbit/s"
    MEGABITS_PER_SECOND = "Mbit/s"
    GIGABITS_PER_SECOND = "Gbit/s"
    BYTES_PER_SECOND = "B/s"
    KILOBYTES_PER_SECOND = "kB/s"
    MEGABYTES_PER_SECOND = "MB/s"
    GIGABYTES_PER_SECOND = "GB/s"
    KIBIBYTES_PER_SECOND = "KiB/s"
    MEBIBYTES_PER_SECOND = "MiB/s"
    GIBIBYTES_PER_SECOND = "GiB/s"


class ConcentrationUnit(str, Enum):
    MICROGRAMS_PER_CUBIC_METER = "µg/m³"
    MILLIGRAMS_PER_CUBIC_METER = "mg/m³"
    PARTS_PER_MILLION = "ppm"
    PARTS_PER_BILLION = "ppb"


class SignalStrengthUnit(str, Enum):
    DECIBELS = "dB"
    DECIBELS_MILLIWATT = "dBm"


class SoundPressureUnit(str, Enum):
    DECIBEL = "dB"
    WEIGHTED_DECIBEL_A = "dBA"


class IrradianceUnit(str, Enum):
    WATTS_PER_SQUARE_METER = "W/m²"
    BTUS_PER_HOUR_SQUARE_FOOT = "BTU/(h⋅ft²)"


class IlluminanceUnit(str, Enum):
    LUX = "lx"


class DegreeUnit(str, Enum):
    DEGREE = "°"


Unit = (
    PercentageUnit
    | TemperatureUnit
    | PowerUnit
    | ApparentPowerUnit
    | ReactivePowerUnit
    | EnergyUnit
    | VoltageUnit
    | CurrentUnit
    | FrequencyUnit
    | PressureUnit
    | TimeUnit
    | LengthUnit
    | VolumeUnit
    | MassUnit
    | SpeedUnit
    | PrecipitationIntensityUnit
    | DataSizeUnit
    | DataRateUnit
    | ConcentrationUnit
    | SignalStrengthUnit
    | SoundPressureUnit
    | IrradianceUnit
    | IlluminanceUnit
    | DegreeUnit
)

# Free-form strings are accepted too: Home Assistant lets integrations
# declare units it has no constant for.
UnitOfMeasurement = Unit | str
