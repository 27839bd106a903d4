"""
Media value objects: filename, storage key, size and URL.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from urllib.parse import SplitResult, urlsplit
from uuid import uuid4

from pydantic import field_validator

from cms_core.domain.values import ValueObject
from cms_core.errors import ValidationError

FILENAME_MAX_LENGTH = 255
R2_KEY_MAX_LENGTH = 1024
URL_MAX_LENGTH = 2048
MAX_MEDIA_BYTES = 100 * 1024 * 1024

KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"})

R2_HOSTS = ("r2.cloudflarestorage.com", "r2.dev")
CLOUDFLARE_IMAGES_HOST = "imagedelivery.net"

_FILENAME_UNSAFE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_R2_KEY_CHARS = re.compile(r"[A-Za-z0-9._/-]+")
_R2_NAME_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")
_R2_PATH_UNSAFE = re.compile(r"[^A-Za-z0-9._/-]")
_REPEATED_SLASHES = re.compile(r"/{2,}")


def _epoch_millis(now: datetime | None) -> int:
    now = now or datetime.now(UTC)
    return int(now.timestamp() * 1000)


def _split_extension(name: str) -> tuple[str, str]:
    """Split name into (base, extension) at the last dot; extension keeps the dot."""
    index = name.rfind(".")
    if index == -1:
        return name, ""
    return name[:index], name[index:]


# --- Filename ---


class MediaFilename(ValueObject):
    """Stored media filename: trimmed, 1-255 chars, no path-unsafe characters."""

    value: str

    label = "filename"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Filename is required")
        if len(v) > FILENAME_MAX_LENGTH:
            raise ValueError(f"Filename must be at most {FILENAME_MAX_LENGTH} characters")
        if _FILENAME_UNSAFE.search(v):
            raise ValueError('Filename cannot contain any of < > : " / \\ | ? * or control characters')
        return v

    @classmethod
    def create(cls, value: str) -> MediaFilename:
        return cls._build(value=value)

    from_string = create

    @classmethod
    def from_original_name(
        cls,
        original_name: str,
        content_id: object | None = None,
        now: datetime | None = None,
    ) -> MediaFilename:
        """
        Build a stored filename from an uploaded file's original name.

        Unsafe characters become underscores and the name is prefixed with
        the upload time in epoch milliseconds (and the content id if given):
        ``[<content_id>_]<millis>_<name><ext>``.

        Raises:
            ValidationError: If nothing usable remains after sanitization
        """
        sanitized = _FILENAME_UNSAFE.sub("_", original_name).strip()
        if not sanitized.strip("_"):
            raise ValidationError("Filename cannot be empty after sanitization", field=cls.label)

        name, extension = _split_extension(sanitized)
        prefix = f"{content_id}_" if content_id is not None else ""
        return cls.create(f"{prefix}{_epoch_millis(now)}_{name}{extension}")

    @property
    def extension(self) -> str:
        return _split_extension(self.value)[1]

    @property
    def name_without_extension(self) -> str:
        return _split_extension(self.value)[0]

    @property
    def length(self) -> int:
        return len(self.value)

    def has_extension(self, ext: str) -> bool:
        return self.extension.lower() == ext.lower()

    def is_image(self) -> bool:
        return self.extension.lower() in IMAGE_EXTENSIONS


# --- Storage key ---


class MediaR2Key(ValueObject):
    """Object key in the media bucket: 1-1024 chars of [A-Za-z0-9._/-]."""

    value: str

    label = "r2_key"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Invalid R2 key: key is required")
        if len(v) > R2_KEY_MAX_LENGTH:
            raise ValueError(f"Invalid R2 key: must be at most {R2_KEY_MAX_LENGTH} characters")
        if _R2_KEY_CHARS.fullmatch(v) is None:
            raise ValueError(
                "Invalid R2 key: only letters, numbers, '.', '_', '-' and '/' are allowed"
            )
        return v

    @classmethod
    def create(cls, value: str) -> MediaR2Key:
        return cls._build(value=value)

    from_string = create

    @classmethod
    def from_filename(
        cls,
        filename: str,
        prefix: str | None = None,
        now: datetime | None = None,
    ) -> MediaR2Key:
        """Timestamped key ``[<prefix>/]<millis>_<sanitized filename>``."""
        key = f"{_epoch_millis(now)}_{_R2_NAME_UNSAFE.sub('_', filename)}"
        if prefix:
            key = f"{prefix.strip('/')}/{key}"
        return cls.create(key)

    @classmethod
    def from_path(cls, path: str) -> MediaR2Key:
        """Normalize a path into a key (no leading or repeated slashes)."""
        normalized = _REPEATED_SLASHES.sub("/", path.strip().lstrip("/"))
        return cls.create(_R2_PATH_UNSAFE.sub("_", normalized))

    @classmethod
    def for_content(
        cls, content_id: object, filename: str, now: datetime | None = None
    ) -> MediaR2Key:
        return cls.from_filename(filename, f"content/{content_id}", now)

    @classmethod
    def for_media(
        cls, media_id: object, filename: str, now: datetime | None = None
    ) -> MediaR2Key:
        return cls.from_filename(filename, f"media/{media_id}", now)

    @classmethod
    def generate(cls, filename: MediaFilename, now: datetime | None = None) -> MediaR2Key:
        """
        Random key for a stored file, foldered by kind.

        Images go under ``images/``, everything else under ``files/``.
        """
        folder = "images" if filename.is_image() else "files"
        extension = _R2_NAME_UNSAFE.sub("_", filename.extension)
        return cls.create(f"{folder}/{_epoch_millis(now)}-{uuid4().hex[:8]}{extension}")

    @property
    def length(self) -> int:
        return len(self.value)

    @property
    def filename(self) -> str:
        return self.value.rpartition("/")[2]

    @property
    def directory(self) -> str:
        return self.value.rpartition("/")[0]

    @property
    def extension(self) -> str:
        return _split_extension(self.filename)[1]

    def has_prefix(self, prefix: str) -> bool:
        return self.value.startswith(prefix)

    def is_in_directory(self, directory: str) -> bool:
        return self.value.startswith(directory.rstrip("/") + "/")

    def with_prefix(self, prefix: str) -> MediaR2Key:
        return MediaR2Key.create(f"{prefix.rstrip('/')}/{self.value}")

    def with_suffix(self, suffix: str) -> MediaR2Key:
        """Insert suffix before the extension of the key's filename."""
        directory, slash, filename = self.value.rpartition("/")
        name, extension = _split_extension(filename)
        return MediaR2Key.create(f"{directory}{slash}{name}{suffix}{extension}")


# --- Size ---


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _one_decimal(value: float) -> str:
    return f"{_round_half_up(value * 10) / 10:g}"


class MediaSize(ValueObject):
    """Media size in bytes, 1 byte to 100 MiB inclusive."""

    value: int

    label = "size"

    @field_validator("value")
    @classmethod
    def _check(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Invalid media size: must be at least 1 byte")
        if v > MAX_MEDIA_BYTES:
            raise ValueError("Invalid media size: must be at most 100 MB")
        return v

    @classmethod
    def create(cls, value: int) -> MediaSize:
        return cls._build(value=value)

    from_bytes = create

    @classmethod
    def from_kilobytes(cls, kb: float) -> MediaSize:
        return cls.create(_round_half_up(kb * KB))

    @classmethod
    def from_megabytes(cls, mb: float) -> MediaSize:
        return cls.create(_round_half_up(mb * MB))

    @property
    def bytes(self) -> int:
        return self.value

    @property
    def kilobytes(self) -> float:
        return self.value / KB

    @property
    def megabytes(self) -> float:
        return self.value / MB

    @property
    def gigabytes(self) -> float:
        return self.value / GB

    def is_small(self) -> bool:
        return self.value < MB

    def is_medium(self) -> bool:
        return MB <= self.value < 10 * MB

    def is_large(self) -> bool:
        return self.value >= 10 * MB

    def is_within_limit(self, max_bytes: int) -> bool:
        return self.value <= max_bytes

    def compare(self, other: MediaSize) -> int:
        return (self.value > other.value) - (self.value < other.value)

    def is_larger_than(self, other: MediaSize) -> bool:
        return self.value > other.value

    def is_smaller_than(self, other: MediaSize) -> bool:
        return self.value < other.value

    def __lt__(self, other: MediaSize) -> bool:
        if not isinstance(other, MediaSize):
            return NotImplemented
        return self.value < other.value

    def to_human_readable(self) -> str:
        """Format like "512 B", "1.5 KB" or "100 MB"."""
        if self.value < KB:
            return f"{self.value} B"
        if self.value < MB:
            return f"{_one_decimal(self.kilobytes)} KB"
        if self.value < GB:
            return f"{_one_decimal(self.megabytes)} MB"
        return f"{_one_decimal(self.gigabytes)} GB"

    def __str__(self) -> str:
        return self.to_human_readable()


# --- URL ---


class MediaUrl(ValueObject):
    """Absolute http(s) URL of a stored media file, at most 2048 chars."""

    value: str

    label = "url"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        if not v:
            raise ValueError("Invalid media URL: URL is required")
        if len(v) > URL_MAX_LENGTH:
            raise ValueError(f"Invalid media URL: must be at most {URL_MAX_LENGTH} characters")
        if any(ch.isspace() for ch in v):
            raise ValueError("Invalid media URL: whitespace is not allowed")
        try:
            parts = urlsplit(v)
            parts.port  # noqa: B018 - raises on a malformed port
        except ValueError as e:
            raise ValueError(f"Invalid media URL: {e}") from e
        if parts.scheme not in ("http", "https"):
            raise ValueError("Invalid media URL: only http and https are allowed")
        if not parts.hostname:
            raise ValueError("Invalid media URL: host is required")
        return v

    @classmethod
    def create(cls, value: str) -> MediaUrl:
        return cls._build(value=value)

    from_string = create

    @classmethod
    def from_r2(
        cls,
        bucket_name: str,
        r2_key: str | MediaR2Key,
        custom_domain: str | None = None,
    ) -> MediaUrl:
        """
        URL of an object in an R2 bucket.

        Uses the bucket's storage endpoint unless a custom (CDN) domain is
        given.
        """
        key = str(r2_key).lstrip("/")
        if custom_domain:
            base = custom_domain.rstrip("/")
        else:
            base = f"https://{bucket_name}.{R2_HOSTS[0]}"
        return cls.create(f"{base}/{key}")

    @classmethod
    def from_cloudflare_images(
        cls, account_id: str, image_id: str, variant: str = "public"
    ) -> MediaUrl:
        return cls.create(f"https://{CLOUDFLARE_IMAGES_HOST}/{account_id}/{image_id}/{variant}")

    @property
    def _parts(self) -> SplitResult:
        return urlsplit(self.value)

    @property
    def domain(self) -> str:
        return self._parts.hostname or ""

    @property
    def protocol(self) -> str:
        return f"{self._parts.scheme}:"

    @property
    def path(self) -> str:
        return self._parts.path or "/"

    @property
    def filename(self) -> str:
        return self.path.rpartition("/")[2]

    def is_secure(self) -> bool:
        return self._parts.scheme == "https"

    def is_cloudflare_r2(self) -> bool:
        host = self.domain
        return any(host == base or host.endswith("." + base) for base in R2_HOSTS)

    def is_cloudflare_images(self) -> bool:
        return self.domain == CLOUDFLARE_IMAGES_HOST

    def with_variant(self, variant: str) -> MediaUrl:
        """
        Same Cloudflare Images URL with a different delivery variant.

        Raises:
            ValidationError: If this is not a ``/<account>/<image>/<variant>``
                Cloudflare Images URL
        """
        if not self.is_cloudflare_images():
            raise ValidationError(
                "URL variant can only be applied to Cloudflare Images URLs", field=self.label
            )
        segments = [segment for segment in self._parts.path.split("/") if segment]
        if len(segments) != 3:
            raise ValidationError("Invalid Cloudflare Images URL format", field=self.label)

        account_id, image_id, _ = segments
        parts = self._parts
        return MediaUrl.create(f"{parts.scheme}://{parts.netloc}/{account_id}/{image_id}/{variant}")
