from pydantic import BaseModel, ConfigDict, Field


class RequestConfig(BaseModel):
    name: str = Field(description="Name used to select the request with --name.")
    method: str = Field(description="HTTP method, case-insensitive.", examples=["GET", "post"])
    url: str = Field(description="Target URL, may contain {{variable}} placeholders.")
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = Field(default=None, description="Raw request body, may contain {{variable}} placeholders.")
    is_json: bool = Field(default=False, alias="json", description="Send the body as JSON.")
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class Config(BaseModel):
    variables: dict[str, str] = Field(default_factory=dict)
    requests: list[RequestConfig] = Field(default_factory=list)
    model_config = ConfigDict(extra="forbid")

    def substitute_variables(self, text: str) -> str:
        """Replace every ``{{name}}`` with its variable value, literally and without escaping."""
        for key, value in self.variables.items():
            text = text.replace(f"{{{{{key}}}}}", value)
        return text

    def select(self, name: str | None = None) -> list[RequestConfig]:
        if name is None:
            return list(self.requests)
        return [request for request in self.requests if request.name == name]
