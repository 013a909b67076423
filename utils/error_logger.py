#!/usr/bin/env python3
"""
Structured error logging shared by the test ledger, the connector and the routes
"""
import logging
import json
import time
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

class ErrorLogger:
    def __init__(self, component_name: str, log: Optional[logging.Logger] = None):
        self.component_name = component_name
        self.log = log or logger

    def log_error(self, error_type: str, message: str, details: Optional[Dict[str, Any]] = None, exception: Optional[BaseException] = None) -> Dict[str, Any]:
        """
        Log a structured error record

        Args:
            error_type: Machine readable kind (e.g. 'run_request_failed')
            message: Human readable error message
            details: Context such as image name or container id
            exception: Exception that caused the error, if any

        Returns:
            The record as a dict, suitable for a JSON response body
        """
        error_data = self._record(error_type, message, details, exception)

        self.log.error(f"[{self.component_name}] {error_type}: {message}")
        if details:
            self.log.error(f"Details: {json.dumps(details, indent=2, default=str)}")
        if exception:
            self.log.error(f"Exception: {type(exception).__name__}: {exception}")

        return error_data

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None, exception: Optional[BaseException] = None) -> Dict[str, Any]:
        """Log a warning with component context"""
        warning_data = self._record("warning", message, details, exception)
        suffix = f" ({type(exception).__name__}: {exception})" if exception else ""
        self.log.warning(f"[{self.component_name}] {message}{suffix}")
        if details:
            self.log.warning(f"Details: {json.dumps(details, indent=2, default=str)}")
        return warning_data

    def _record(self, error_type: str, message: str, details: Optional[Dict[str, Any]], exception: Optional[BaseException]) -> Dict[str, Any]:
        record = {
            "timestamp": time.time(),
            "component": self.component_name,
            "error_type": error_type,
            "message": message,
            "details": details or {}
        }
        if exception:
            record["exception"] = {
                "type": type(exception).__name__,
                "message": str(exception)
            }
        return record
