"""Shared DynamoDB utilities.

This package centralizes:
- boto3 client configuration
- decoding of typed-attribute items into plain records
- classification of ExecuteStatement failures into typed errors and advice text

"""

from __future__ import annotations
