"""Public object-storage URL resolution for product images.

Product rows store either an absolute image URL or a path relative to the
public product bucket. Uploads and signed URLs are handled by the hosted
storage service and are not part of this service.
"""

from woodshop.config import settings
from woodshop.infra.logging import get_logger

logger = get_logger(__name__)

_ABSOLUTE_SCHEMES = ("http://", "https://")


class ImageResolver:
    """Turns stored image references into fetchable URLs."""

    def __init__(self, public_base: str | None = None) -> None:
        """Initialize the resolver.

        Args:
            public_base: Public bucket URL prefix. Defaults to
                settings.image_public_base.
        """
        base = public_base if public_base is not None else settings.image_public_base
        self._public_base = base.rstrip("/")

    @property
    def public_base(self) -> str:
        return self._public_base

    @staticmethod
    def is_absolute(ref: str) -> bool:
        """Check whether a reference is already a full http(s) URL."""
        return ref.lower().startswith(_ABSOLUTE_SCHEMES)

    def resolve(self, ref: str | None) -> str:
        """Resolve a stored image reference.

        Absolute URLs pass through unchanged; storage-relative paths are
        joined to the public bucket base. Blank references resolve to "".
        """
        if not ref:
            return ""
        ref = ref.strip()
        if not ref:
            return ""
        if self.is_absolute(ref):
            return ref
        return f"{self._public_base}/{ref.lstrip('/')}"

    def __call__(self, ref: str | None) -> str:
        return self.resolve(ref)


# Singleton instance
_image_resolver: ImageResolver | None = None


def get_image_resolver() -> ImageResolver:
    """Get the singleton image resolver."""
    global _image_resolver
    if _image_resolver is None:
        _image_resolver = ImageResolver()
        logger.info("Image resolver configured", public_base=_image_resolver.public_base)
    return _image_resolver
