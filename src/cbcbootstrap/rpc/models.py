"""JSON-RPC envelope and payload models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"


class RPCRequest(BaseModel):
    """JSON-RPC request envelope"""

    id: int
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str
    params: list[Any] = Field(default_factory=list)


class RPCErrorObject(BaseModel):
    """JSON-RPC error object"""

    code: int
    message: str


class RPCResponse(BaseModel):
    """JSON-RPC response envelope"""

    id: int | None = None
    jsonrpc: str = JSONRPC_VERSION
    result: Any = None
    error: RPCErrorObject | None = None


class RuntimeVersion(BaseModel):
    """Result of state_getRuntimeVersion.

    Only spec_name and spec_version are required; the node may add fields
    this model does not know about.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    spec_name: str = Field(alias="specName")
    spec_version: int = Field(alias="specVersion")
    impl_name: str = Field(default="", alias="implName")
    authoring_version: int = Field(default=0, alias="authoringVersion")
    impl_version: int = Field(default=0, alias="implVersion")
    apis: list[Any] = Field(default_factory=list)
    transaction_version: int = Field(default=0, alias="transactionVersion")
    state_version: int = Field(default=0, alias="stateVersion")
