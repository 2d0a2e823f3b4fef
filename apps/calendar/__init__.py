"""Room calendars and price comparison derived from overrides."""
