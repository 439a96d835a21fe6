# engine/exceptions.py

class LogEngineError(Exception):
    pass


class InputDecodeError(LogEngineError):
    pass


class AnalysisCancelled(LogEngineError):
    pass
