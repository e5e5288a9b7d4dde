r"""Resource loading.

Templates are read through a `ResourceLoader`, which maps a location string
to a `Resource` exposing `exists()` and `open()`. Any storage backend fits
behind the protocol.

Basic usage:
    from stacheview.resources import DefaultResourceLoader

    loader = DefaultResourceLoader("/srv/app")
    resource = loader.get_resource("views/index.mustache")
    if resource.exists():
        with resource.open() as stream:
            content = stream.read()
"""

from ._default import DefaultResourceLoader
from ._filesystem import FileResource, FileSystemResourceLoader
from ._memory import InMemoryResource, InMemoryResourceLoader
from ._package import PackageResource, PackageResourceLoader
from ._protocols import Resource, ResourceLoader
from ._url import UrlResource, UrlResourceLoader

__all__ = [
    "DefaultResourceLoader",
    "FileResource",
    "FileSystemResourceLoader",
    "InMemoryResource",
    "InMemoryResourceLoader",
    "PackageResource",
    "PackageResourceLoader",
    "Resource",
    "ResourceLoader",
    "UrlResource",
    "UrlResourceLoader",
]
