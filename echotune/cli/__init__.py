"""
Command-line interface: argument parsing, console rendering and the picker.
"""
