from typing import Optional


class EnvInvalidException(ValueError):
    def __init__(self, env_name: str, value: Optional[str] = None, supported_values: Optional[list[str]] = None):
        message = f"[ENV INVALID] Invalid environment variable: `{env_name}`"
        if value:
            message += f" (value: `{value}`) "
        if supported_values:
            message += f" (supported values: {', '.join(supported_values)})"
        super().__init__(message)
