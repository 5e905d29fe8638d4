"""TRX loading and mapping into the domain model."""
