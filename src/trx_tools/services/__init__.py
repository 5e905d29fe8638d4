"""File-level services for trx-tools."""

from trx_tools.services.trx_file_service import TRX_EXTENSION, TrxFileService

__all__ = ["TRX_EXTENSION", "TrxFileService"]
