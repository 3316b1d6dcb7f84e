import typing


class ImproperlyConfigured(Exception):
    pass


class PlexHooksError(Exception):
    def __init__(
        self, message: str, code: typing.Any = None, params: typing.Any = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.params = params

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return {
            "error_class": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "params": self.params,
        }


class PayloadError(PlexHooksError, ValueError):
    """Raised when a webhook payload cannot be decoded or dispatched."""

    pass


class SensorDoesNotExist(PlexHooksError, KeyError):
    pass
