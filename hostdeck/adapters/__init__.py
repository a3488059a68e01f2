"""
Adapters: CLI, configuration loading and the terminal UI
"""
