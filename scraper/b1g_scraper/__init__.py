"""Big Ten men's basketball ingestion from ESPN's public site API."""
