"""Construction material calculator: slabs, ceilings, flooring, concrete mix."""

__version__ = "1.0.0"
