"""Command-line surface of archer-pack.

Argument parsing, prompts, console output and the packaging workflow
live here.  Nothing in ``core``, ``infra`` or ``config`` imports this
package.
"""
