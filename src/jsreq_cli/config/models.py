"""Configuration models using Pydantic."""

from pydantic import BaseModel, Field, field_validator


class FilterConfig(BaseModel):
    """File filtering configuration."""

    exclude: list[str] = Field(
        default_factory=list,
        description="Patterns to exclude from scanning",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Patterns to include (overrides exclude)",
    )


class ScanConfig(BaseModel):
    """Project scan configuration."""

    extensions: list[str] = Field(
        default_factory=lambda: [".js", ".mjs", ".cjs"],
        description="File suffixes treated as JavaScript sources",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read source files",
    )
    fail_fast: bool = Field(
        default=False,
        description="Stop at the first file that cannot be parsed",
    )

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]


class JsreqConfig(BaseModel):
    """Main jsreq configuration."""

    filter: FilterConfig = Field(
        default_factory=FilterConfig,
        description="File filtering configuration",
    )
    scan: ScanConfig = Field(
        default_factory=ScanConfig,
        description="Project scan configuration",
    )
