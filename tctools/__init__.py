"""Small desktop utilities: backup lists, mounts, network, mouse, launcher, dialogs and tray configuration helpers."""

__version__ = "1.0.0"