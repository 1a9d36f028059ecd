"""archer-pack — package container applications into CloudFormation stacks.

Resolves an application manifest and an environment into a
CloudFormation template plus its parameter document.
"""

from archer_pack.version import __version__

__all__: list[str] = ["__version__"]
