"""
niri scheduler bridge

Forwards niri window focus changes to the System76 scheduler so the process
owning the focused window gets foreground scheduling priority.
"""

__version__ = "1.0.0"
