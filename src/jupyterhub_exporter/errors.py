"""Exceptions raised while talking to the hub."""


class ExporterError(Exception):
    """Base class for everything the exporter raises on purpose."""


class HubAPIError(ExporterError):
    """The request to the hub could not be built or sent."""


class HubDecodeError(ExporterError):
    """The hub answered with something that isn't a list of users."""
