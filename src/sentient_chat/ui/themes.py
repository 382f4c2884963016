"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Dark palette built on Catppuccin Mocha, with a violet primary for the
# Sentient branding
SENTIENT_DARK = Theme(
    name="sentient-dark",
    primary="#b4a1f7",      # Violet - panels and focus
    secondary="#cba6f7",    # Mauve - assistant messages
    accent="#f9e2af",       # Gold - highlights
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",      # Green - user messages, Send
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "block-cursor-foreground": "#11111b",
        "block-cursor-background": "#f5e0dc",
        "input-cursor-background": "#cdd6f4",
        "input-selection-background": "#b4a1f7 30%",

        "border": "#45475a",
        "border-blurred": "#313244",

        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#b4a1f7",
        "scrollbar-background": "#181825",

        "footer-foreground": "#bac2de",
        "footer-background": "#11111b",
        "footer-key-foreground": "#f9e2af",

        "text-muted": "#6c7086",
    },
)
