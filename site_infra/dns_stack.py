from typing import List

from aws_cdk import CfnOutput, Fn, RemovalPolicy, Stack
from aws_cdk.aws_iam import Role, AccountPrincipal, CompositePrincipal, PolicyStatement, Effect
from aws_cdk.aws_route53 import PublicHostedZone
from constructs import Construct

from site_infra.config import CROSS_ACCOUNT_ROLE_NAME


class DnsStack(Stack):
    """
    returns the root hosted zone and the role stage accounts assume to manage its records
    """

    def __init__(self, scope: Construct, construct_id: str, domain_name: str,
                 trusted_account_ids: List[str], **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        if not trusted_account_ids:
            raise ValueError("DnsStack needs at least one trusted account id")

        self.hosted_zone = PublicHostedZone(
            self,
            "RootHostedZone",
            zone_name=domain_name
        )
        self.hosted_zone.apply_removal_policy(RemovalPolicy.RETAIN_ON_UPDATE_OR_DELETE)

        self.cross_account_role = self.create_cross_account_role(trusted_account_ids)
        self.cross_account_role.add_to_policy(
            PolicyStatement(
                effect=Effect.ALLOW,
                actions=[
                    "route53:ChangeResourceRecordSets",
                    "route53:GetChange",
                    "route53:ListResourceRecordSets",
                ],
                resources=[
                    self.hosted_zone.hosted_zone_arn,
                    "arn:aws:route53:::change/*",
                ]
            )
        )
        # certificate validation looks the zone up before writing records
        self.cross_account_role.add_to_policy(
            PolicyStatement(
                effect=Effect.ALLOW,
                actions=["route53:GetHostedZone", "route53:ListHostedZones"],
                resources=["*"]
            )
        )

        CfnOutput(self, "HostedZoneId",
                  value=self.hosted_zone.hosted_zone_id,
                  description="Hosted Zone ID",
                  export_name=f"{self.stack_name}-HostedZoneId")
        CfnOutput(self, "HostedZoneName",
                  value=self.hosted_zone.zone_name,
                  description="Hosted Zone Name",
                  export_name=f"{self.stack_name}-HostedZoneName")
        CfnOutput(self, "CrossAccountRoleArn",
                  value=self.cross_account_role.role_arn,
                  description="ARN of the cross-account DNS management role",
                  export_name=f"{self.stack_name}-CrossAccountRoleArn")
        CfnOutput(self, "NameServers",
                  value=Fn.join(", ", self.hosted_zone.hosted_zone_name_servers or []),
                  description="Name servers for the hosted zone")

    def create_cross_account_role(self, trusted_account_ids: List[str]) -> Role:
        return Role(
            self,
            "CrossAccountDnsRole",
            role_name=CROSS_ACCOUNT_ROLE_NAME,
            assumed_by=CompositePrincipal(
                *[AccountPrincipal(account_id) for account_id in trusted_account_ids]
            ),
            description="Role allowing cross-account DNS record management"
        )
