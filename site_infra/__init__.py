"""
CDK constructs for a multi-account static website:
* Route53 hosted zone and cross-account DNS role in the DNS account
* S3 + CloudFront website per stage account
"""
