"""
EchoTune: browse the radio-browser.info catalog and play stations through VLC.
"""

__version__ = "0.2.0"
