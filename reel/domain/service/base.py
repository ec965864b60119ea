"""Domain service base."""


class Service:
    """Marker base for domain services.

    Services hold the rules that span entities (threading, counters, cache
    coherency) and talk to repositories through their abstract interfaces.
    """

    pass
