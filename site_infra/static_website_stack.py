"""
Static website for a single stage:
* private S3 bucket holding the site
* CloudFront distribution reading the bucket through an origin access identity
* DNS validated certificate and alias record in the DNS account's hosted zone
* optional deployment of the built site into the bucket
"""
import logging
import os
from typing import Optional

from aws_cdk import CfnOutput, RemovalPolicy, Stack, Tags
from aws_cdk.aws_certificatemanager import Certificate, CertificateValidation
from aws_cdk.aws_cloudfront import OriginAccessIdentity, Distribution, BehaviorOptions, \
    ViewerProtocolPolicy, CachePolicy, ErrorResponse, SecurityPolicyProtocol
from aws_cdk.aws_cloudfront_origins import S3BucketOrigin
from aws_cdk.aws_route53 import HostedZone, IHostedZone, ARecord, RecordTarget
from aws_cdk.aws_route53_targets import CloudFrontTarget
from aws_cdk.aws_s3 import Bucket, BlockPublicAccess, BucketEncryption
from aws_cdk.aws_s3_deployment import BucketDeployment, Source
from constructs import Construct

logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"
ERROR_DOCUMENT = "/error.html"


class StaticWebsiteStack(Stack):
    """
    returns the website resources for one stage
    """

    def __init__(self, scope: Construct, construct_id: str, domain_name: str, hosted_zone_id: str,
                 hosted_zone_name: str, cross_account_role_arn: str, stage_name: str,
                 site_assets_path: Optional[str] = None, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.stage_name = stage_name
        self.domain_name = domain_name

        self.bucket = self.create_bucket()
        self.hosted_zone = self.import_hosted_zone(hosted_zone_id, hosted_zone_name)
        self.certificate = Certificate(
            self,
            "Certificate",
            domain_name=domain_name,
            validation=CertificateValidation.from_dns(self.hosted_zone)
        )

        self.oai = OriginAccessIdentity(
            self,
            "OAI",
            comment=f"OAI for {domain_name}"
        )
        # s3:List* from the grant makes missing keys answer 404 instead of 403
        self.bucket.grant_read(self.oai)

        self.distribution = self.create_distribution()

        ARecord(
            self,
            "AliasRecord",
            zone=self.hosted_zone,
            record_name=domain_name,
            target=RecordTarget.from_alias(CloudFrontTarget(self.distribution))
        )

        if site_assets_path:
            self.deployment = self.create_deployment(site_assets_path)
        else:
            self.deployment = None
            logger.info("No site assets configured for %s, skipping bucket deployment", stage_name)

        CfnOutput(self, "BucketName", value=self.bucket.bucket_name, description="S3 Bucket Name")
        CfnOutput(self, "DistributionId",
                  value=self.distribution.distribution_id,
                  description="CloudFront Distribution ID")
        CfnOutput(self, "DistributionDomainName",
                  value=self.distribution.distribution_domain_name,
                  description="CloudFront Distribution Domain Name")
        CfnOutput(self, "WebsiteUrl", value=f"https://{domain_name}", description="Website URL")
        CfnOutput(self, "CrossAccountRoleArn",
                  value=cross_account_role_arn,
                  description="Role in the DNS account allowed to manage records for this stage")

        Tags.of(self).add("Stage", stage_name)
        Tags.of(self).add("Project", "static-website")

    def create_bucket(self) -> Bucket:
        return Bucket(
            self,
            "SiteBucket",
            bucket_name=f"{self.stage_name}-website-{self.account}",
            website_index_document=INDEX_DOCUMENT,
            public_read_access=False,
            block_public_access=BlockPublicAccess.BLOCK_ALL,
            encryption=BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            removal_policy=RemovalPolicy.DESTROY,
            auto_delete_objects=True
        )

    def import_hosted_zone(self, hosted_zone_id: str, hosted_zone_name: str) -> IHostedZone:
        # the zone lives in the DNS account, only its attributes are known here
        return HostedZone.from_hosted_zone_attributes(
            self,
            "HostedZone",
            hosted_zone_id=hosted_zone_id,
            zone_name=hosted_zone_name
        )

    def create_distribution(self) -> Distribution:
        return Distribution(
            self,
            "Distribution",
            default_behavior=BehaviorOptions(
                origin=S3BucketOrigin.with_origin_access_identity(
                    self.bucket,
                    origin_access_identity=self.oai
                ),
                viewer_protocol_policy=ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
                cache_policy=CachePolicy.CACHING_OPTIMIZED
            ),
            domain_names=[self.domain_name],
            certificate=self.certificate,
            default_root_object=INDEX_DOCUMENT,
            minimum_protocol_version=SecurityPolicyProtocol.TLS_V1_2_2021,
            error_responses=[
                ErrorResponse(http_status=404, response_http_status=404, response_page_path=ERROR_DOCUMENT),
                ErrorResponse(http_status=403, response_http_status=403, response_page_path=ERROR_DOCUMENT),
            ]
        )

    def create_deployment(self, site_assets_path: str) -> BucketDeployment:
        site_assets_path = os.path.abspath(site_assets_path)
        if not os.path.isdir(site_assets_path):
            raise FileNotFoundError(f"Site assets directory {site_assets_path} does not exist")

        return BucketDeployment(
            self,
            "WebsiteDeployment",
            sources=[Source.asset(site_assets_path)],
            destination_bucket=self.bucket,
            distribution=self.distribution,
            distribution_paths=["/*"]
        )
