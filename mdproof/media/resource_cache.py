"""
Image resource cache.

Resolves image URIs against a resources directory and memoises their
dimensions.  Lookups are guarded by a lock, so one populated cache can
serve several layouts running in parallel.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Set, Tuple
from urllib.parse import unquote, urlparse

from PIL import Image, UnidentifiedImageError

from ..engine.geometry import px_to_points
from ..exceptions import MediaError

logger = logging.getLogger(__name__)

Dimensions = Tuple[float, float]


class ResourceCache:
    """
    Cache of image dimensions keyed by URI.

    Dimensions are returned in points, derived from the native pixel size at
    ``dpi`` dots per inch.  Misses are cached too, so a missing image is
    reported once per cache.
    """

    def __init__(self, root: Optional[Path] = None, dpi: float = 300.0):
        self.root = Path(root) if root is not None else Path(".")
        self.dpi = dpi
        self._dimensions: Dict[str, Optional[Dimensions]] = {}
        self._paths: Dict[str, Path] = {}
        self._missing: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def missing(self) -> Set[str]:
        with self._lock:
            return set(self._missing)

    def resolve(self, uri: str) -> Path:
        """Map an image URI to a filesystem path below :attr:`root`."""
        parsed = urlparse(uri)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path))
        path = Path(unquote(uri))
        if path.is_absolute():
            return path
        return self.root / path

    def image_path(self, uri: str) -> Optional[Path]:
        if self.image_dimensions(uri) is None:
            return None
        with self._lock:
            return self._paths.get(uri)

    def image_dimensions(self, uri: str) -> Optional[Dimensions]:
        """Return ``(width, height)`` in points, or ``None`` if unreadable."""
        with self._lock:
            if uri in self._dimensions:
                return self._dimensions[uri]

        try:
            path, dimensions = self._load(uri)
        except MediaError as exc:
            logger.debug("Couldn't load image %s", exc)
            with self._lock:
                self._dimensions[uri] = None
                self._missing.add(uri)
            return None

        with self._lock:
            self._dimensions[uri] = dimensions
            self._paths[uri] = path
        return dimensions

    def preload(self, uris: Iterable[str]) -> None:
        """Load every URI up front so layout never touches the filesystem."""
        for uri in uris:
            self.image_dimensions(uri)

    def _load(self, uri: str) -> Tuple[Path, Dimensions]:
        parsed = urlparse(uri)
        if parsed.scheme not in ("", "file") and len(parsed.scheme) > 1:
            raise MediaError(uri, f"unsupported scheme '{parsed.scheme}'")

        path = self.resolve(uri)
        try:
            with Image.open(path) as image:
                width_px, height_px = image.size
        except FileNotFoundError:
            raise MediaError(uri, f"file not found: {path}") from None
        except (UnidentifiedImageError, OSError) as exc:
            raise MediaError(uri, str(exc)) from exc

        dimensions = (px_to_points(width_px, self.dpi), px_to_points(height_px, self.dpi))
        logger.debug("Image %s: %dx%d px -> %.1fx%.1f pt", uri, width_px, height_px, *dimensions)
        return path, dimensions
