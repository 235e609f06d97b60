"""Domain layer: entities, access policy and error taxonomy."""
