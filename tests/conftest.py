"""Pytest configuration and fixtures."""

import pytest

from package_auditor.models import AuditConfig


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


@pytest.fixture
def audit_config():
    return AuditConfig(
        base_url="bb.example.com",
        project="PRJ",
        package="Foo",
        token="test-token",
        ignore_repo_prefix="ignore-",
    )


@pytest.fixture
def sample_csproj_lines():
    """A small SDK-style project file, one entry per line."""
    return [
        '<Project Sdk="Microsoft.NET.Sdk">',
        "  <PropertyGroup>",
        "    <TargetFramework>net8.0</TargetFramework>",
        "  </PropertyGroup>",
        "  <ItemGroup>",
        '    <PackageReference Include="Foo" Version="1.2.3" />',
        '    <PackageReference Include="Bar" Version="4.0.0" />',
        '    <!-- <PackageReference Include="Foo" Version="0.9.0" /> -->',
        "  </ItemGroup>",
        "</Project>",
    ]
