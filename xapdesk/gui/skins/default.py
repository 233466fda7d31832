"""
Default Skin - Dark Desk

Dark background, dim labels, bright lit buttons and meter bands.
"""
import platform

SKIN = {
    # ==========================================================================
    # PALETTE
    # ==========================================================================

    # Backgrounds (darkest to lightest)
    'bg_dark': '#0d0d0d',
    'bg_mid': '#1a1a1a',
    'bg_light': '#242424',

    # Borders
    'border_dark': '#2a2a2a',
    'border_light': '#4a4a4a',

    # Text (dimmest to brightest)
    'text_dim': '#606060',
    'text_mid': '#909090',
    'text_bright': '#d0d0d0',

    # Group headings
    'accent_group': '#00ccff',

    # ==========================================================================
    # STATES
    # ==========================================================================

    # Lit "On" button (channel audible)
    'lit_on_bg': '#0a2a15',
    'lit_on_text': '#00ff66',
    'lit_on_border': '#00aa44',

    # Lit "Off" button (channel muted)
    'lit_off_bg': '#ff3333',
    'lit_off_text': '#ffffff',
    'lit_off_border': '#aa4444',

    # Unlit button
    'unlit_bg': '#1a1a1a',
    'unlit_text': '#505050',
    'unlit_hover': '#242424',

    # Connection status
    'status_ok': '#00ff66',
    'status_warn': '#ffaa00',
    'status_error': '#ff3333',

    # ==========================================================================
    # METERS
    # ==========================================================================

    'meter_bg': '#0a0a0a',
    'meter_green': '#00cc44',
    'meter_yellow': '#ffaa00',
    'meter_red': '#ff3333',
    'meter_idle': '#606060',

    # ==========================================================================
    # CONTROLS
    # ==========================================================================

    'slider_groove': '#1a1a1a',
    'slider_groove_border': '#3a3a3a',
    'slider_handle': '#808080',
    'slider_handle_hover': '#a0a0a0',
    'slider_handle_border': '#4a4a4a',

    # ==========================================================================
    # FONTS
    # ==========================================================================

    'font_family': 'Helvetica',
    'font_mono': 'Menlo' if platform.system() == 'Darwin' else 'Consolas',

    'font_size_title': 16,
    'font_size_section': 12,
    'font_size_label': 10,
    'font_size_small': 9,
    'font_size_tiny': 8,

    # ==========================================================================
    # SIZES
    # ==========================================================================

    'strip_width': 64,
    'fader_height': 180,
    'button_width': 28,
    'button_height': 18,
}
