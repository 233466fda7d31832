"""
Theme - Centralized color and style definitions
All surface widgets reference this for consistent styling

Loads from the active skin in xapdesk/gui/skins/
"""
from xapdesk.config import BAND_GREEN, BAND_RED, BAND_YELLOW

from .skins import active as skin

# =============================================================================
# SKIN ACCESS
# =============================================================================

def get(key, default='#ff00ff'):
    """Get value from active skin. Magenta = missing key."""
    return skin.SKIN.get(key, default)


FONT_FAMILY = get('font_family')
MONO_FONT = get('font_mono')

FONT_SIZES = {
    'title': get('font_size_title'),
    'section': get('font_size_section'),
    'label': get('font_size_label'),
    'small': get('font_size_small'),
    'tiny': get('font_size_tiny'),
}

SIZES = {
    'strip_width': get('strip_width'),
    'fader_height': get('fader_height'),
    'button': (get('button_width'), get('button_height')),
}

COLORS = {
    # UI elements
    'background': get('bg_mid'),
    'background_dark': get('bg_dark'),
    'background_light': get('bg_light'),
    'border': get('border_dark'),
    'border_light': get('border_light'),
    'text': get('text_mid'),
    'text_bright': get('text_bright'),
    'text_dim': get('text_dim'),
    'accent_group': get('accent_group'),

    # Status
    'status_ok': get('status_ok'),
    'status_warn': get('status_warn'),
    'status_error': get('status_error'),

    # Sliders
    'slider_groove': get('slider_groove'),
    'slider_handle': get('slider_handle'),
    'slider_handle_hover': get('slider_handle_hover'),

    # Meters
    'meter_bg': get('meter_bg'),
    'meter_idle': get('meter_idle'),
}

# Meter text colour per band
METER_COLORS = {
    BAND_GREEN: get('meter_green'),
    BAND_YELLOW: get('meter_yellow'),
    BAND_RED: get('meter_red'),
}


# =============================================================================
# STYLE FUNCTIONS
# =============================================================================

def lit_button_style(role, lit):
    """On/Off button style. role is 'on' or 'off'; only the lit one is coloured."""
    if lit:
        return f"""
            QPushButton {{
                background-color: {get(f'lit_{role}_bg')};
                color: {get(f'lit_{role}_text')};
                border: 1px solid {get(f'lit_{role}_border')};
                border-radius: 3px;
                font-weight: bold;
            }}
        """
    return f"""
        QPushButton {{
            background-color: {get('unlit_bg')};
            color: {get('unlit_text')};
            border: 1px solid {COLORS['border']};
            border-radius: 3px;
        }}
        QPushButton:hover {{
            background-color: {get('unlit_hover')};
        }}
    """


def meter_label_style(band=None):
    """Meter readout colour for a band; None before the first reading."""
    color = METER_COLORS.get(band, COLORS['meter_idle'])
    return f"""
        QLabel {{
            background-color: {COLORS['meter_bg']};
            color: {color};
            border: 1px solid {COLORS['border']};
            border-radius: 2px;
        }}
    """


def slider_style():
    """Get standard vertical slider stylesheet."""
    return f"""
        QSlider {{
            border: none;
            background: transparent;
        }}
        QSlider::groove:vertical {{
            border: 1px solid {get('slider_groove_border')};
            width: 8px;
            background: {COLORS['slider_groove']};
            border-radius: 4px;
        }}
        QSlider::handle:vertical {{
            background: {COLORS['slider_handle']};
            border: 1px solid {get('slider_handle_border')};
            height: 12px;
            margin: 0 -3px;
            border-radius: 6px;
        }}
        QSlider::handle:vertical:hover {{
            background: {COLORS['slider_handle_hover']};
        }}
    """


def status_style(state):
    """Status label colour: 'ok', 'warn' or 'error'."""
    return f"color: {COLORS['status_' + state]}; font-weight: bold;"


def panel_style():
    """Standard panel style with border."""
    return f"""
        QFrame {{
            background-color: {COLORS['background']};
            border: 1px solid {COLORS['border']};
            border-radius: 4px;
        }}
        QLabel {{
            border: none;
            background: transparent;
        }}
    """
