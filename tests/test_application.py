"""
Tests for wiring the DNS and stage stacks into one app.
"""
import logging

import pytest
from aws_cdk import App
from aws_cdk.assertions import Template

from site_infra.application import build_app
from site_infra.config import AppConfig, ConfigurationError
from site_infra.dns_stack import DnsStack

from conftest import DNS_ACCOUNT, BETA_ACCOUNT, GAMMA_ACCOUNT, PROD_ACCOUNT


class TestBuildApp:
    """Tests for build_app."""

    def test_builds_all_stacks(self, config):
        stacks = build_app(App(), config)
        assert list(stacks) == ["dns", "beta", "gamma", "prod"]
        assert stacks["dns"].stack_name == "DnsStack"
        assert stacks["beta"].stack_name == "BetaStaticWebsiteStack"
        assert stacks["gamma"].stack_name == "GammaStaticWebsiteStack"
        assert stacks["prod"].stack_name == "ProdStaticWebsiteStack"

    def test_stacks_target_their_accounts(self, config):
        stacks = build_app(App(), config)
        assert stacks["dns"].account == DNS_ACCOUNT
        assert stacks["beta"].account == BETA_ACCOUNT
        assert stacks["gamma"].account == GAMMA_ACCOUNT
        assert stacks["prod"].account == PROD_ACCOUNT
        assert {stack.region for stack in stacks.values()} == {"us-east-1"}

    def test_stage_stacks_depend_on_dns_stack(self, config):
        stacks = build_app(App(), config)
        for stage in ["beta", "gamma", "prod"]:
            assert "DnsStack" in [stack.stack_name for stack in stacks[stage].dependencies]

    def test_stage_domains(self, config):
        stacks = build_app(App(), config)
        Template.from_stack(stacks["gamma"]).has_output("WebsiteUrl", {"Value": "https://gamma.example.com"})
        Template.from_stack(stacks["prod"]).has_output("WebsiteUrl", {"Value": "https://example.com"})

    def test_synthesizes_cloud_assembly(self, config):
        app = App()
        build_app(app, config)
        assembly = app.synth()
        names = {stack.stack_name for stack in assembly.stacks}
        assert names == {"DnsStack", "BetaStaticWebsiteStack", "GammaStaticWebsiteStack",
                         "ProdStaticWebsiteStack"}

    def test_dns_stack_only_without_hosted_zone_id(self, config, caplog):
        config.hosted_zone_id = None
        with caplog.at_level(logging.WARNING, logger="site_infra.application"):
            stacks = build_app(App(), config)
        assert list(stacks) == ["dns"]
        assert isinstance(stacks["dns"], DnsStack)
        assert "hostedZoneId is not set" in caplog.text

    def test_fails_fast_on_missing_configuration(self, config):
        app = App()
        config.domain_name = None
        with pytest.raises(ConfigurationError, match="domainName"):
            build_app(app, config)
        assert len(app.node.children) == 0

    def test_from_context(self, context):
        context["hostedZoneId"] = "ZCONTEXT"
        app = App(context=context)
        stacks = build_app(app, AppConfig.from_app(app, environ={}))
        Template.from_stack(stacks["beta"]).has_resource_properties(
            "AWS::Route53::RecordSet", {"HostedZoneId": "ZCONTEXT"}
        )
