import os
from typing import TYPE_CHECKING, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_TABLE_READY_POLL_SECONDS, DEFAULT_TABLE_READY_TIMEOUT_SECONDS
from .exceptions import ConfigurationError
from .models.schema import SchemaMode

if TYPE_CHECKING:
    from .client import KVSClient


class KVSConfig(BaseModel):
    """Connection configuration for the key-value store.

    Immutable once constructed. Values are passed in explicitly; nothing is
    read from the environment unless from_env() is used.
    """

    endpoint_url: Optional[str] = Field(
        default=None,
        description="DynamoDB endpoint URL (None uses the AWS default for the region)"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        description="AWS secret access key"
    )

    region_name: str = Field(
        default="us-east-1",
        description="AWS region name"
    )

    # Connection settings
    timeout_seconds: float = Field(
        default=30.0,
        description="Connect and read timeout for each DynamoDB request"
    )

    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    max_attempts: int = Field(
        default=1,
        description="Total attempts per request (1 disables botocore retries)"
    )

    # Table readiness
    table_ready_timeout_seconds: float = Field(
        default=DEFAULT_TABLE_READY_TIMEOUT_SECONDS,
        description="Upper bound on waiting for a newly created table to become ACTIVE"
    )

    table_ready_poll_seconds: float = Field(
        default=DEFAULT_TABLE_READY_POLL_SECONDS,
        description="Delay between DescribeTable polls while waiting"
    )

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid key-value store configuration: {e}", e) from e

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('timeout_seconds', 'table_ready_timeout_seconds', 'table_ready_poll_seconds')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator('max_pool_connections', 'max_attempts')
    @classmethod
    def validate_at_least_one(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @model_validator(mode='after')
    def validate_credentials_pair(self):
        """Static credentials must be given as a complete pair or not at all."""
        if bool(self.aws_access_key_id) != bool(self.aws_secret_access_key):
            raise ValueError("aws_access_key_id and aws_secret_access_key must be set together")
        return self

    def new_client(self, table_name: str, mode: SchemaMode = SchemaMode.SINGLE_KEY) -> Optional["KVSClient"]:
        """Create a client bound to one table and one schema mode.

        Args:
            table_name: DynamoDB table name
            mode: Table shape the client reads and writes

        Returns:
            KVSClient, or None when table_name is empty
        """
        if not table_name:
            return None

        # Import here to avoid circular imports (config -> client -> config)
        from .client import KVSClient
        return KVSClient(self, table_name, mode)

    @classmethod
    def from_env(cls) -> 'KVSConfig':
        """Create configuration from environment variables.

        Loads a .env file first if one exists. Reads AWS_ACCESS_KEY_ID,
        AWS_SECRET_ACCESS_KEY, AWS_REGION, DYNAMODB_ENDPOINT_URL and
        DYNAMODB_TABLE_READY_TIMEOUT.

        Returns:
            KVSConfig instance
        """
        load_dotenv()

        values = {
            'aws_access_key_id': os.getenv("AWS_ACCESS_KEY_ID"),
            'aws_secret_access_key': os.getenv("AWS_SECRET_ACCESS_KEY"),
            'region_name': os.getenv("AWS_REGION", "us-east-1"),
            'endpoint_url': os.getenv("DYNAMODB_ENDPOINT_URL"),
        }
        ready_timeout = os.getenv("DYNAMODB_TABLE_READY_TIMEOUT")
        if ready_timeout:
            values['table_ready_timeout_seconds'] = ready_timeout
        return cls(**values)

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:8000") -> 'KVSConfig':
        """Create configuration for DynamoDB Local or LocalStack.

        Returns:
            KVSConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            table_ready_poll_seconds=1.0
        )
