"""
Implementation modules for CLI commands.
"""
