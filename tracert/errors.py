# tracert/errors.py


class TracertError(Exception):
    pass


class ResolutionFailure(TracertError):
    """Destination name could not be turned into an IPv4 address."""

    def __init__(self, destination: str):
        super().__init__(f"Unable to resolve target system name {destination}.")
        self.destination = destination
