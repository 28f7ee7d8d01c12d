from loguru import logger

from formsniff.boundary import generate_boundary, header_boundary
from formsniff.buffer import ByteBuffer
from formsniff.errors import FormSniffError, InvalidInputError, IOFailureError
from formsniff.multipart import (
    FileField,
    FormData,
    ScalarField,
    build_multipart,
    classify_fields,
)
from formsniff.signatures import SIGNATURES, Signature
from formsniff.extensions import EXTENSION_TYPES
from formsniff.sniffer import DEFAULT_MIME_TYPE, Sniffer, sniff

# Library logging stays silent until the application calls logger.enable("formsniff").
logger.disable("formsniff")

__all__ = [
    "FormData",
    "build_multipart",
    "classify_fields",
    "FileField",
    "ScalarField",
    "Sniffer",
    "sniff",
    "DEFAULT_MIME_TYPE",
    "SIGNATURES",
    "Signature",
    "EXTENSION_TYPES",
    "generate_boundary",
    "header_boundary",
    "ByteBuffer",
    "FormSniffError",
    "InvalidInputError",
    "IOFailureError",
]
