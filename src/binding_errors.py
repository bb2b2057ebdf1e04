class BindingError(Exception):
    pass


class InvalidArgumentError(BindingError, ValueError):
    pass


class UnsupportedModeError(BindingError, NotImplementedError):
    pass


class BindingNotFoundError(BindingError):
    def __init__(self, name, candidates):
        self.name = name
        self.candidates = list(candidates)
        tried = "\n".join(f" - {candidate}" for candidate in self.candidates)
        super().__init__(f"Failed to find binding for {name}\nTried paths:\n{tried}")


class InternalInvariantError(BindingError, RuntimeError):
    pass
