"""Infrastructure layer: configuration, logging and store gateways."""
