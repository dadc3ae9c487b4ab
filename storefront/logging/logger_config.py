"""
Logging Configuration
Provides structured logging with security features
"""
import logging
import logging.handlers
import json
import re
from typing import Dict, List, Optional
from datetime import datetime


class SensitiveDataFilter(logging.Filter):
    """
    Filter to redact sensitive data from logs
    Prevents password, token, session secret and card number leakage
    """

    # JSON field redaction: ("field": "value")
    SENSITIVE_FIELDS = [
        'password', 'passwd', 'pwd', 'password_hash', 'password_confirmation',
        'api_key', 'api_secret', 'token', 'access_token', 'refresh_token',
        'csrf_token', 'csrfToken', 'secret', 'secret_key',
    ]

    SENSITIVE_PATTERNS = {
        # Credit card numbers (basic pattern)
        'credit_card': r'\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{4}\b',

        # Password in query strings / form bodies
        'email_password': r'(email=.*&password=)[^&]*',

        # Session and CSRF cookies
        'session_cookie': r'((?:sessionId|csrf-token)=)[^;\s]+',

        # Authorization headers
        'auth_header': r'(Authorization:\s+Bearer\s+)[A-Za-z0-9\-_=.+/]+',
    }

    def __init__(self, additional_patterns: Optional[Dict[str, str]] = None):
        """
        Initialize sensitive data filter
        Args:
            additional_patterns: Additional regex patterns to redact (name: pattern)
        """
        super().__init__()
        patterns = {
            field: rf'("{field}"\s*:\s*)"[^"]*"' for field in self.SENSITIVE_FIELDS
        }
        patterns.update(self.SENSITIVE_PATTERNS)
        if additional_patterns:
            patterns.update(additional_patterns)

        self.compiled_patterns = {
            name: re.compile(pattern, re.IGNORECASE)
            for name, pattern in patterns.items()
        }

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter log record to redact sensitive data
        Returns:
            True (always pass the record, but with redacted content)
        """
        if isinstance(record.msg, str):
            record.msg = self._redact_sensitive_data(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self._redact_sensitive_data(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._redact_sensitive_data(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True

    def _redact_sensitive_data(self, text: str) -> str:
        """Redact sensitive data from text"""
        redacted = text

        for name, pattern in self.compiled_patterns.items():
            if name == 'credit_card':
                # Keep last 4 digits
                def redact_cc(match):
                    cc = match.group(0).replace('-', '').replace(' ', '')
                    return f"****-****-****-{cc[-4:]}"
                redacted = pattern.sub(redact_cc, redacted)
            elif name in self.SENSITIVE_FIELDS:
                redacted = pattern.sub(r'\1"[REDACTED]"', redacted)
            else:
                redacted = pattern.sub(r'\1[REDACTED]', redacted)

        return redacted


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging

    Outputs logs in JSON format for easy parsing and analysis
    """

    RESERVED_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
        'getMessage', 'message', 'taskName',
    }

    def __init__(self, include_fields: Optional[List[str]] = None):
        super().__init__()
        self.include_fields = include_fields or []

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data['stack'] = record.stack_info

        for field in self.include_fields:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Extra fields passed via logger.x(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class LoggerConfig:
    """
    Centralized logging configuration
    """
    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = 'json',
        max_bytes: int = None,
        backup_count: int = None,
        filter_sensitive: bool = True,
        additional_sensitive_patterns: Optional[Dict[str, str]] = None,
        file_name: Optional[str] = None
    ) -> logging.Logger:
        """
        Setup a logger with rotation and optional sensitive data filtering

        Args:
            name: Logger name
            format_type: Format type ('json' or 'text')
            max_bytes: Max bytes before rotation (default: 10MB)
            backup_count: Number of backup files to keep
            filter_sensitive: Enable sensitive data filtering
            additional_sensitive_patterns: Additional patterns to filter
            file_name: Log file name without extension (defaults to logger name)

        Returns:
            Configured logger

        Example:
            logger = LoggerConfig.setup_logger('security', format_type='json')
        """
        from storefront.support import Config, Storage
        from storefront.defaults import DEFAULT_LOG_MAX_BYTES, DEFAULT_LOG_BACKUP_COUNT

        if max_bytes is None:
            max_bytes = Config.get('logging_config.LOG_MAX_BYTES', DEFAULT_LOG_MAX_BYTES)
        if backup_count is None:
            backup_count = Config.get('logging_config.LOG_BACKUP_COUNT', DEFAULT_LOG_BACKUP_COUNT)

        app_env = Config.get('app.APP_ENV', 'development')
        app_debug = Config.get('app.APP_DEBUG', False)

        level = LoggerConfig.get_level_by_environment(app_env)

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()

        log_file = Storage.logs(f"{file_name or name}.log")
        Storage.ensure_directory(log_file.parent)

        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )

        if format_type == 'json':
            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        handler.setFormatter(formatter)

        sensitive_filter = None
        if filter_sensitive:
            sensitive_filter = SensitiveDataFilter(additional_sensitive_patterns)
            handler.addFilter(sensitive_filter)

        logger.addHandler(handler)

        if app_debug:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            if sensitive_filter:
                console_handler.addFilter(sensitive_filter)
            logger.addHandler(console_handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

        return logger

    @staticmethod
    def setup_application_loggers() -> List[logging.Logger]:
        """
        Setup every configured logging channel plus the storefront package logger
        """
        from storefront.support import Config

        allowed_handlers = Config.get('app.ALLOWED_LOGGING_HANDLERS', {})
        filter_sensitive = Config.get('logging_config.FILTER_SENSITIVE', True)

        loggers = [
            LoggerConfig.setup_logger(
                name=handler_config.get('name'),
                format_type=handler_config.get('format', 'json'),
                filter_sensitive=handler_config.get('filter_sensitive', filter_sensitive),
                file_name=handler_config.get('file_name')
            )
            for handler_config in allowed_handlers.values()
        ]
        # Module loggers (storefront.session.readiness, ...) share one file
        loggers.append(LoggerConfig.setup_logger(
            name='storefront',
            filter_sensitive=filter_sensitive,
            file_name='application'
        ))

        # Keep Sanic's console output separate from our handlers
        for logger_name in ['sanic.root', 'sanic.error', 'sanic.access', 'sanic.server']:
            logging.getLogger(logger_name).propagate = False

        return loggers

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """
        Get logging level based on environment

        Args:
            environment: Environment name ('production', 'development', 'testing')

        Returns:
            Logging level
        """
        levels = {
            'production': logging.WARNING,
            'staging': logging.INFO,
            'development': logging.DEBUG,
            'testing': logging.ERROR,
        }
        return levels.get(environment.lower(), logging.INFO)
