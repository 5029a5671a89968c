"""HTTP relay that runs PartiQL statements against DynamoDB and returns plain JSON rows."""

__version__ = "1.0.0"
