"""
Application configuration read from CDK context with environment variable fallback.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from aws_cdk import App

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
CROSS_ACCOUNT_ROLE_NAME = "CrossAccountDnsManagementRole"

REQUIRED_FIELDS = ["dnsAccount", "betaAccount", "gammaAccount", "prodAccount", "domainName"]

# context key -> (attribute, environment variable or None)
CONFIG_KEYS = {
    "dnsAccount": ("dns_account", "DNS_ACCOUNT_ID"),
    "betaAccount": ("beta_account", "BETA_ACCOUNT_ID"),
    "gammaAccount": ("gamma_account", "GAMMA_ACCOUNT_ID"),
    "prodAccount": ("prod_account", "PROD_ACCOUNT_ID"),
    "domainName": ("domain_name", "DOMAIN_NAME"),
    # region is read from context only
    "region": ("region", None),
    "hostedZoneId": ("hosted_zone_id", "HOSTED_ZONE_ID"),
    "siteAssetsPath": ("site_assets_path", "SITE_ASSETS_PATH"),
}

ACCOUNT_ID_PATTERN = re.compile(r"^\d{12}$")


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class StageConfig:
    name: str
    account: str
    domain_name: str


@dataclass
class AppConfig:
    dns_account: Optional[str] = None
    beta_account: Optional[str] = None
    gamma_account: Optional[str] = None
    prod_account: Optional[str] = None
    domain_name: Optional[str] = None
    region: str = DEFAULT_REGION
    hosted_zone_id: Optional[str] = None
    site_assets_path: Optional[str] = None
    sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_app(cls, app: App, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        returns the configuration, preferring `--context` values over environment variables
        """
        environ = os.environ if environ is None else environ
        values = {}
        sources = {}
        for context_key, (attribute, env_var) in CONFIG_KEYS.items():
            value = app.node.try_get_context(context_key)
            source = "context"
            if value in (None, "") and env_var:
                value = environ.get(env_var)
                source = "environment"
            if value in (None, ""):
                continue
            values[attribute] = str(value).strip()
            sources[attribute] = source

        if values.get("domain_name"):
            values["domain_name"] = values["domain_name"].lower().rstrip(".")

        config = cls(sources=sources, **values)
        logger.debug("Loaded configuration %s from %s", config, sources)
        return config

    def validate(self) -> "AppConfig":
        for context_key in REQUIRED_FIELDS:
            attribute, env_var = CONFIG_KEYS[context_key]
            if not getattr(self, attribute):
                raise ConfigurationError(
                    f"Missing required configuration: {context_key}. "
                    f"Set via --context {context_key}=value or environment variable {env_var}"
                )

        for context_key in ["dnsAccount", "betaAccount", "gammaAccount", "prodAccount"]:
            attribute, _ = CONFIG_KEYS[context_key]
            if not ACCOUNT_ID_PATTERN.match(str(getattr(self, attribute))):
                raise ConfigurationError(
                    f"Invalid configuration: {context_key} must be a 12 digit AWS account id, "
                    f"got {getattr(self, attribute)!r}"
                )

        if self.region != DEFAULT_REGION:
            logger.warning("CloudFront certificates must live in %s, stacks target %s",
                           DEFAULT_REGION, self.region)
        return self

    @property
    def trusted_account_ids(self) -> List[str]:
        return [self.beta_account, self.gamma_account, self.prod_account]

    @property
    def cross_account_role_arn(self) -> str:
        return f"arn:aws:iam::{self.dns_account}:role/{CROSS_ACCOUNT_ROLE_NAME}"

    def stages(self) -> List[StageConfig]:
        """
        returns the stage definitions, prod serves the root domain
        """
        return [
            StageConfig("beta", self.beta_account, f"beta.{self.domain_name}"),
            StageConfig("gamma", self.gamma_account, f"gamma.{self.domain_name}"),
            StageConfig("prod", self.prod_account, self.domain_name),
        ]
