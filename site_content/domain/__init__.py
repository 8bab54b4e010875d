"""Domain layer: entities, enums and exceptions for the site content tree."""
