"""
Terminal front end. Import lazily so the engine never needs prompt_toolkit:

    from dicterm.ui.app import TerminalApp
"""
