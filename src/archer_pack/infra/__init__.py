"""Infrastructure layer — filesystem, package data and git integration.

Every raw ``OSError``/``yaml.YAMLError`` must be caught here and
re-raised as a :class:`~archer_pack.exceptions.ArcherPackError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from archer_pack.infra.env_store import FileEnvironmentStore
from archer_pack.infra.git import default_image_tag
from archer_pack.infra.template_store import PackagedTemplateStore
from archer_pack.infra.workspace import FileWorkspace

__all__: list[str] = [
    "FileEnvironmentStore",
    "FileWorkspace",
    "PackagedTemplateStore",
    "default_image_tag",
]
