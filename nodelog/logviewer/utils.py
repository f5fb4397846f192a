# Utility functions and constants for log viewer styling
# Contains level colors, per-module badge colors and readable text color selection

import colorsys


# Text colors for each level spelling the nodes emit
level_colors = {
    'debug': '#808080',
    'dbug': '#808080',
    'info': '#000000',
    'warn': '#FF8000',
    'error': '#FF0000',
    'eror': '#FF0000',
    'crit': '#800000',
    'fatal': '#800000',
    'panic': '#800000',
}
default_level_color = '#000000'


def level_color(level):
    """Return the text color used for *level*."""
    return level_colors.get(level, default_level_color)


def level_abbreviation(level):
    """Return the one-letter badge shown for *level*."""
    text = str(level)
    return text[:1].upper() if text else '?'


def module_colors(modules, min_shades=11):
    """Return a dict mapping each module to a hex color spaced around the HSV hue circle.

    At least *min_shades* hues are generated so that small module sets still
    get clearly distinct colors.
    """
    shades = max(len(modules), min_shades)
    colors = {}
    for i, module in enumerate(modules):
        r, g, b = colorsys.hsv_to_rgb(i / shades, 1.0, 1.0)
        colors[module] = f"#{int(r * 255):02X}{int(g * 255):02X}{int(b * 255):02X}"
    return colors


def hex_to_rgb(color):
    """Convert ``#RGB`` or ``#RRGGBB`` to an (r, g, b) tuple, or None if malformed."""
    text = color.lstrip('#')
    if len(text) == 3:
        text = ''.join(c * 2 for c in text)
    if len(text) != 6:
        return None
    try:
        return tuple(int(text[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return None


def font_color_for_background(color):
    """Return 'black' or 'white', whichever reads better on the *color* background."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return 'black'
    r, g, b = rgb
    brightness = round((r * 299 + g * 587 + b * 114) / 1000)
    return 'black' if brightness > 140 else 'white'
