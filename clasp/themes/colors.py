# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color palettes and the rich theme used for Clasp output.

`OneColors` and `NordColors` expose hex color constants. Any constant can be
requested in bold by appending `_b` to its name (`OneColors.CYAN_b`), which
resolves to a rich style string such as `"bold #56B6C2"`.

`get_nord_theme()` returns the `rich.theme.Theme` installed on the global
consoles.
"""
from rich.theme import Theme


class ColorsMeta(type):
    """Resolve `<NAME>_b` attribute lookups to a bold variant of `<NAME>`."""

    def __getattr__(cls, name: str) -> str:
        if name.endswith("_b"):
            base = name[:-2]
            for klass in cls.__mro__:
                if base in klass.__dict__:
                    return f"bold {klass.__dict__[base]}"
        raise AttributeError(f"{cls.__name__} has no color named '{name}'")


class OneColors(metaclass=ColorsMeta):
    """Atom One Dark palette."""

    BLACK = "#282C34"
    GUTTER_GREY = "#4B5263"
    COMMENT_GREY = "#5C6370"
    WHITE = "#ABB2BF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    DARK_YELLOW = "#D19A66"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"


class NordColors(metaclass=ColorsMeta):
    """Nord palette."""

    POLAR_NIGHT_ORIGIN = "#2E3440"
    POLAR_NIGHT_BRIGHT = "#4C566A"
    SNOW_STORM_BRIGHTEST = "#ECEFF4"
    FROST_TEAL = "#8FBCBB"
    FROST_ICE = "#88C0D0"
    FROST_SKY = "#81A1C1"
    FROST_DEEP = "#5E81AC"
    AURORA_RED = "#BF616A"
    AURORA_ORANGE = "#D08770"
    AURORA_YELLOW = "#EBCB8B"
    AURORA_GREEN = "#A3BE8C"
    AURORA_PURPLE = "#B48EAD"


def get_nord_theme() -> Theme:
    """Return the Nord-based rich theme."""
    return Theme(
        {
            "repr.number": NordColors.FROST_ICE,
            "repr.str": NordColors.AURORA_GREEN,
            "repr.bool_true": NordColors.AURORA_GREEN,
            "repr.bool_false": NordColors.AURORA_RED,
            "repr.none": NordColors.AURORA_PURPLE,
            "log.level": NordColors.FROST_SKY,
            "logging.level.debug": NordColors.POLAR_NIGHT_BRIGHT,
            "logging.level.info": NordColors.FROST_ICE,
            "logging.level.warning": NordColors.AURORA_YELLOW,
            "logging.level.error": NordColors.AURORA_RED,
            "logging.level.critical": f"bold {NordColors.AURORA_RED}",
            "prompt": NordColors.FROST_SKY,
            "table.header": f"bold {NordColors.FROST_TEAL}",
            "rule.line": NordColors.POLAR_NIGHT_BRIGHT,
            "error": f"bold {NordColors.AURORA_RED}",
            "warning": NordColors.AURORA_YELLOW,
            "success": NordColors.AURORA_GREEN,
        }
    )
