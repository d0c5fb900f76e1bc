"""
File references for operation inputs and results.

A ``FileRef`` wraps a local path, a readable binary stream or a remote URL.
References returned by operations are results: they point at a temporary
file that can be saved or streamed out exactly once.
"""

import asyncio
import shutil
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from .config import get_logger
from .exceptions import UsageError, ValidationError
from .media_types import get_extension, get_media_type
from .validators import MediaTypeValidator, PathValidator, URLValidator

logger = get_logger("file_ref")


class InputType(str, Enum):
    LOCAL_FILE = "local_file"
    STREAM = "stream"
    URL = "url"


class FileRef:
    """
    Reference to a file used as operation input or returned as a result.

    Examples:
        >>> source = FileRef.create_from_local_file("sample.pdf")
        >>> result = await operation.execute(context)
        >>> await result.save_as_file("output/compressed.pdf")
    """

    def __init__(
        self,
        file_source: Any,
        media_type: Optional[str],
        input_type: InputType,
        input_url: Optional[str] = None,
        is_operation_result: bool = False,
        temp_dir: Optional[Path] = None,
    ):
        if input_type is InputType.STREAM:
            if file_source is None:
                raise ValidationError("Readable stream must not be empty")
            media_type = MediaTypeValidator.validate_media_type(media_type, required=True)
        elif input_type is InputType.LOCAL_FILE:
            file_source = PathValidator.validate_path(file_source)
            media_type = MediaTypeValidator.validate_media_type(media_type)
        else:
            input_url = URLValidator.validate_url(input_url)
            file_source = None

        self._file_source = file_source
        self._input_type = input_type
        self._input_url = input_url
        self._is_operation_result = is_operation_result
        self._temp_dir = temp_dir

        if media_type:
            self._media_type = media_type
            self._extension = get_extension(media_type)
        elif input_type is InputType.LOCAL_FILE:
            self._extension = file_source.suffix.lstrip(".").lower() or None
            self._media_type = get_media_type(self._extension)
        else:
            self._media_type = None
            self._extension = None

    @classmethod
    def create_from_local_file(
        cls, path: Union[str, Path], media_type: Optional[str] = None
    ) -> "FileRef":
        """Reference a local file; the media type is derived from its extension when omitted."""
        return cls(path, media_type, InputType.LOCAL_FILE)

    @classmethod
    def create_from_stream(cls, stream: BinaryIO, media_type: str) -> "FileRef":
        """Reference a readable binary stream; the media type is mandatory."""
        return cls(stream, media_type, InputType.STREAM)

    @classmethod
    def create_from_url(cls, url: str) -> "FileRef":
        """Reference a remote URL, passed to the service as-is."""
        return cls(None, None, InputType.URL, input_url=url)

    @classmethod
    def create_operation_result(
        cls, path: Union[str, Path], media_type: Optional[str], temp_dir: Optional[Path] = None
    ) -> "FileRef":
        return cls(
            Path(path),
            media_type,
            InputType.LOCAL_FILE,
            is_operation_result=True,
            temp_dir=temp_dir,
        )

    @property
    def file_source(self) -> Any:
        return self._file_source

    @property
    def media_type(self) -> Optional[str]:
        return self._media_type

    @property
    def extension(self) -> Optional[str]:
        return self._extension

    @property
    def input_type(self) -> InputType:
        return self._input_type

    @property
    def input_url(self) -> Optional[str]:
        return self._input_url

    @property
    def is_operation_result(self) -> bool:
        return self._is_operation_result

    def __repr__(self) -> str:
        source = self._input_url if self._input_type is InputType.URL else self._file_source
        return (
            f"FileRef(input_type={self._input_type.value!r}, source={source!r}, "
            f"media_type={self._media_type!r}, is_operation_result={self._is_operation_result})"
        )

    def as_stream(self) -> BinaryIO:
        """Open a readable binary handle for local and stream references."""
        if self._input_type is InputType.LOCAL_FILE:
            return open(self._file_source, "rb")
        if self._input_type is InputType.STREAM:
            return self._file_source
        raise UsageError("Streams are not supported for URL file references")

    async def read_content(self) -> bytes:
        """Read the whole referenced content without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_content_sync)

    def _read_content_sync(self) -> bytes:
        if self._input_type is InputType.LOCAL_FILE:
            if not self._file_source.is_file():
                raise ValidationError(
                    f"File not found: {self._file_source}",
                    {"path": str(self._file_source)},
                )
            return self._file_source.read_bytes()
        return self.as_stream().read()

    async def save_as_file(self, destination_path: Union[str, Path]) -> Path:
        """Move the result to ``destination_path`` and return the final path.

        The extension of the destination is replaced by the result's own
        extension. Existing files are never overwritten.

        Raises:
            UsageError: If this is not an unconsumed operation result, or the
                target file already exists
            ValidationError: If no destination path is given
        """
        self._ensure_result("save_as_file")
        destination = PathValidator.validate_path(destination_path, "Destination path")
        target = destination.with_suffix(f".{self._extension}") if self._extension else destination

        if target.exists():
            raise UsageError(f"Output file {target} already exists", {"path": str(target)})

        logger.info(
            "Moving the file from temporary location %s to %s", self._file_source, target
        )
        self._is_operation_result = False
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._move_to, target)
        except BaseException:
            self._is_operation_result = True
            raise
        return target

    async def write_to_stream(self, stream: BinaryIO) -> None:
        """Copy the result into a writable binary stream and delete the temporary file.

        Raises:
            UsageError: If this is not an unconsumed operation result
            ValidationError: If no stream is given
        """
        self._ensure_result("write_to_stream")
        if stream is None:
            raise ValidationError("No valid writable stream is provided")

        logger.info(
            "Writing the file from temporary location %s to writable stream", self._file_source
        )
        self._is_operation_result = False
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._copy_to, stream)
        except BaseException:
            self._is_operation_result = True
            raise

    def _ensure_result(self, action: str) -> None:
        if not self._is_operation_result:
            raise UsageError(
                f"{action} can only be called on unconsumed operation result instances"
            )

    def _move_to(self, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(self._file_source), str(target))
        self._cleanup_temp_dir()

    def _copy_to(self, stream: BinaryIO) -> None:
        with open(self._file_source, "rb") as source:
            shutil.copyfileobj(source, stream)
        self._file_source.unlink()
        self._cleanup_temp_dir()

    def _cleanup_temp_dir(self) -> None:
        if self._temp_dir is not None:
            shutil.rmtree(self._temp_dir, ignore_errors=True)
