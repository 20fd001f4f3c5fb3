"""Personal CRM API."""
