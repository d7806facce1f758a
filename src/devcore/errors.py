class DevCoreError(Exception):
    """所有核心錯誤的基底類別，status_code 供 API 層轉換。"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DevCoreError):
    status_code = 404


class ConflictError(DevCoreError):
    status_code = 409


class InvalidNameError(DevCoreError):
    status_code = 422


class IOFailure(DevCoreError):
    status_code = 500


class WriteError(IOFailure):
    pass


class ParseFailure(DevCoreError):
    status_code = 500


class ConfigError(DevCoreError):
    status_code = 500
