"""Audit logging package."""

from subdrip.audit.logger import AuditLogger, get_audit_logger, setup_logging

__all__ = ["AuditLogger", "get_audit_logger", "setup_logging"]
