"""Service layer — business rules over the in-memory stores."""
