class ConfigurationError(Exception):
    pass


class MissingSettingError(ConfigurationError):
    def __init__(self, setting: str, hint: str = ""):
        self.setting = setting
        message = f"Missing mandatory setting '{setting}'."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class InvalidSettingError(ConfigurationError):
    def __init__(self, setting: str, value: object, reason: str):
        self.setting = setting
        self.value = value
        super().__init__(f"Invalid value {value!r} for '{setting}': {reason}")
