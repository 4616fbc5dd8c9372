# engine/exceptions.py

class EngineError(Exception):
    pass


class InvalidParameterError(EngineError, ValueError):
    pass


class UnknownMetricError(EngineError, KeyError):
    pass


class UnknownModelError(EngineError, ValueError):
    pass
