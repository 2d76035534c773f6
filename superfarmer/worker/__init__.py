"""Report worker — consumes report requests from RabbitMQ and writes Excel files."""
