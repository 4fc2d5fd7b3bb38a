import logging
from typing import Dict

from aws_cdk import App, Environment, Stack

from site_infra.config import AppConfig
from site_infra.dns_stack import DnsStack
from site_infra.static_website_stack import StaticWebsiteStack

logger = logging.getLogger(__name__)


def build_app(app: App, config: AppConfig) -> Dict[str, Stack]:
    """
    Adds the DNS stack and, once the hosted zone id is known, one website stack per stage.

    Stacks in different accounts cannot share tokens, so the stage stacks take the
    hosted zone id from configuration (the HostedZoneId output of DnsStack).
    """
    config.validate()

    stacks: Dict[str, Stack] = {}
    dns_stack = DnsStack(
        app,
        "DnsStack",
        env=Environment(account=config.dns_account, region=config.region),
        domain_name=config.domain_name,
        trusted_account_ids=config.trusted_account_ids
    )
    stacks["dns"] = dns_stack

    if not config.hosted_zone_id:
        logger.warning("hostedZoneId is not set, synthesizing DnsStack only. Deploy it, then pass its "
                       "HostedZoneId output via --context hostedZoneId=value or HOSTED_ZONE_ID")
        return stacks

    for stage in config.stages():
        stack = StaticWebsiteStack(
            app,
            f"{stage.name.capitalize()}StaticWebsiteStack",
            env=Environment(account=stage.account, region=config.region),
            domain_name=stage.domain_name,
            hosted_zone_id=config.hosted_zone_id,
            hosted_zone_name=config.domain_name,
            cross_account_role_arn=config.cross_account_role_arn,
            stage_name=stage.name,
            site_assets_path=config.site_assets_path
        )
        stack.add_dependency(dns_stack)
        stacks[stage.name] = stack
        logger.info("Added %s for %s in account %s", stack.stack_name, stage.domain_name, stage.account)

    return stacks
