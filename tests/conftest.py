import pytest

from site_infra.config import AppConfig

DNS_ACCOUNT = "111111111111"
BETA_ACCOUNT = "222222222222"
GAMMA_ACCOUNT = "333333333333"
PROD_ACCOUNT = "444444444444"
DOMAIN_NAME = "example.com"
HOSTED_ZONE_ID = "Z0123456789ABCDEFGHIJ"


@pytest.fixture
def context():
    return {
        "dnsAccount": DNS_ACCOUNT,
        "betaAccount": BETA_ACCOUNT,
        "gammaAccount": GAMMA_ACCOUNT,
        "prodAccount": PROD_ACCOUNT,
        "domainName": DOMAIN_NAME,
    }


@pytest.fixture
def config():
    return AppConfig(
        dns_account=DNS_ACCOUNT,
        beta_account=BETA_ACCOUNT,
        gamma_account=GAMMA_ACCOUNT,
        prod_account=PROD_ACCOUNT,
        domain_name=DOMAIN_NAME,
        hosted_zone_id=HOSTED_ZONE_ID,
    )


@pytest.fixture
def site_assets(tmp_path):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text("<html><body>hello</body></html>")
    (dist / "error.html").write_text("<html><body>oops</body></html>")
    return str(dist)
