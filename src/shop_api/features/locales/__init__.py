"""Reference data: currencies, countries and languages."""
