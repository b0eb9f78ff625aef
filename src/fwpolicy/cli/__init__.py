"""
fwpolicy.cli — Click-based CLI entry point and command handlers.

Commands:
    install     Install a framework's policy files
    remove      Remove a framework's policy files
    plan        Show which files install/remove would touch
    config      Show or initialise configuration
"""
