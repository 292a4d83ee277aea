"""cmdcomplete - parameter completion for registered commands.

Given a partially typed command line and the completion metadata of a
registered command, produces the candidate strings for the token being typed.
Completion specs mix literal text with named handlers (``@range:=1-5``) kept
in a registry shared by every resolution call.
"""
