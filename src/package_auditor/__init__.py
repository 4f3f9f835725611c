"""Package Auditor — cross-repository package version report for Bitbucket.

Scans every repository of a Bitbucket Server project for .csproj files and
reports which version of a given NuGet package each one declares.
"""

__version__ = "0.1.0"
