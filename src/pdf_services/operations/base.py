"""
Base class for service operations.

An operation holds its options and input references, runs at most once and
returns a result ``FileRef`` pointing at a temporary file.
"""

import asyncio
import shutil
import tempfile
import uuid
from abc import ABC
from pathlib import Path
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Type

from ..config import get_logger
from ..exceptions import ServiceApiError, UsageError, ValidationError
from ..file_ref import FileRef, InputType
from ..media_types import MediaType, get_extension
from ..models import PollResult
from ..options.base import OperationOptions
from ..sync import SyncOperationMixin

logger = get_logger("operations")

TEMP_DIR_PREFIX = "pdfservices-"


class Operation(SyncOperationMixin, ABC):
    """
    Single-use orchestrator for one service operation.

    Subclasses declare the endpoint, accepted input media types and options
    class, and build the request payload in ``build_payload``.
    """

    endpoint: ClassVar[str]
    supported_media_types: ClassVar[FrozenSet[str]] = frozenset({MediaType.PDF})
    options_class: ClassVar[Optional[Type[OperationOptions]]] = None
    options_required: ClassVar[bool] = False
    result_media_type: ClassVar[str] = MediaType.PDF

    def __init__(self, options: Optional[OperationOptions] = None):
        self._options = options
        self._source: Optional[FileRef] = None
        self._executed = False

    @classmethod
    def create_new(cls, options: Optional[OperationOptions] = None):
        return cls(options)

    @property
    def options(self) -> Optional[OperationOptions]:
        return self._options

    def set_options(self, options: OperationOptions):
        self._options = options
        return self

    def set_input(self, source: FileRef):
        if source is None:
            raise ValidationError("Input file reference cannot be null")
        if not isinstance(source, FileRef):
            raise ValidationError("Input must be a FileRef")
        self._source = source
        return self

    async def execute(self, context) -> Any:
        """Run the operation against the service.

        Raises:
            UsageError: If the operation was already executed or has no input
            ValidationError: If the input or options are invalid
            ServiceApiError: If the service rejects the operation
            TimeoutError: If the service does not finish in time
        """
        if self._executed:
            raise UsageError(
                f"{type(self).__name__} instance already executed; create a new operation"
            )
        self._executed = True

        self.validate()
        logger.info(
            "All validations successfully done. Beginning %s operation execution",
            self.endpoint,
        )

        payload = await self.build_payload(context)
        result = await context.service.submit(self.endpoint, payload)
        output = await self.handle_result(context, result)
        logger.info("%s operation execution complete", self.endpoint)
        return output

    def validate(self) -> None:
        self.validate_inputs()
        self.validate_options()

    def validate_inputs(self) -> None:
        if self._source is None:
            raise UsageError("No input was set for operation")
        self.check_source(self._source)

    def validate_options(self) -> None:
        if self._options is None:
            if self.options_required:
                raise ValidationError(f"Options cannot be null for {type(self).__name__}")
            return
        if self.options_class is not None and not isinstance(self._options, self.options_class):
            raise ValidationError(
                f"{type(self).__name__} expects {self.options_class.__name__} options"
            )
        self._options.validate()

    def check_source(self, source: FileRef) -> None:
        if source.input_type is InputType.URL:
            raise ValidationError(f"URL inputs are not supported by {type(self).__name__}")
        if source.media_type not in self.supported_media_types:
            raise ValidationError(
                f"Invalid file format: {source.media_type or source.extension} "
                f"is not supported by {type(self).__name__}",
                {"media_type": source.media_type},
            )

    def options_payload(self) -> Dict[str, Any]:
        return self._options.to_payload() if self._options is not None else {}

    async def build_payload(self, context) -> Dict[str, Any]:
        payload = {"assetID": await upload_input(context, self._source)}
        payload.update(self.options_payload())
        return payload

    async def handle_result(self, context, result: PollResult) -> Any:
        return await store_result(context, result, self.result_media_type)


async def upload_input(context, source: FileRef) -> str:
    logger.info("Uploading input %r", source)
    return await context.service.upload_asset(source)


async def store_result(context, result: PollResult, default_media_type: str) -> FileRef:
    """Save a terminal result into a fresh temporary directory."""
    media_type = result.media_type or default_media_type
    extension = get_extension(media_type) or get_extension(default_media_type)

    if not result.download_uri and not result.content:
        raise ServiceApiError(
            "Operation completed without a result asset",
            request_tracking_id=result.request_id,
        )

    loop = asyncio.get_running_loop()
    temp_dir = Path(
        await loop.run_in_executor(None, lambda: tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
    )
    destination = temp_dir / f"{uuid.uuid4().hex}.{extension}"

    try:
        if result.download_uri:
            await context.service.download(result.download_uri, destination)
        else:
            await loop.run_in_executor(None, destination.write_bytes, result.content)
    except BaseException:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise

    logger.info(
        "Result of request %s saved to temporary location %s", result.request_id, destination
    )
    return FileRef.create_operation_result(destination, media_type, temp_dir=temp_dir)
