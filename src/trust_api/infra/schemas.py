from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# Guac GraphQL -------------------------------------------------------------

class GuacQualifier(BaseModel):
	key: str
	value: str


class GuacVersion(BaseModel):
	"""Leaf of the package trie: one concrete version"""
	version: str = ""
	qualifiers: list[GuacQualifier] = Field(default_factory=list)
	subpath: str = ""


class GuacName(BaseModel):
	name: str
	versions: list[GuacVersion] = Field(default_factory=list)


class GuacNamespace(BaseModel):
	namespace: str = ""
	names: list[GuacName] = Field(default_factory=list)


class GuacPackage(BaseModel):
	"""Root of the package trie as returned by packages / IsDependency"""
	type: str
	namespaces: list[GuacNamespace] = Field(default_factory=list)


class GuacVulnerabilityId(BaseModel):
	vulnerability_id: str = Field(alias="vulnerabilityID")


class GuacVulnerability(BaseModel):
	type: str
	vulnerability_ids: list[GuacVulnerabilityId] = Field(default_factory=list, alias="vulnerabilityIDs")


class GuacVulnMetadata(BaseModel):
	db_uri: Optional[str] = Field(default=None, alias="dbUri")
	time_scanned: Optional[str] = Field(default=None, alias="timeScanned")


class GuacCertifyVuln(BaseModel):
	vulnerability: GuacVulnerability
	metadata: Optional[GuacVulnMetadata] = None


class GuacIsDependency(BaseModel):
	package: GuacPackage
	dependency_package: GuacPackage = Field(alias="dependencyPackage")


class GuacError(BaseModel):
	model_config = ConfigDict(extra="allow")

	message: str


class GuacResponse(BaseModel):
	data: Optional[dict[str, Any]] = None
	errors: Optional[list[GuacError]] = None


# Snyk REST ----------------------------------------------------------------

class SnykSeverity(BaseModel):
	source: Optional[str] = None
	level: Optional[str] = None
	score: Optional[float] = None
	vector: Optional[str] = None


class SnykProblem(BaseModel):
	id: str
	source: Optional[str] = None
	url: Optional[str] = None


class SnykIssueAttributes(BaseModel):
	key: Optional[str] = None
	title: Optional[str] = None
	description: Optional[str] = None
	type: Optional[str] = None
	effective_severity_level: Optional[str] = None
	severities: list[SnykSeverity] = Field(default_factory=list)
	problems: list[SnykProblem] = Field(default_factory=list)


class SnykIssue(BaseModel):
	id: str
	type: Optional[str] = None
	attributes: SnykIssueAttributes


class SnykIssuesResponse(BaseModel):
	data: list[SnykIssue] = Field(default_factory=list)
