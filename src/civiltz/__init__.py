"""civiltz: proleptic Gregorian calendar and zone-rule engine."""

__version__ = "0.1.0"
