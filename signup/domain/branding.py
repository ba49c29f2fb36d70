"""
Brand wording for outgoing account messages.

The wording depends only on the identity zone the request is scoped to and
the brand configured for the deployment:

- a non-default zone always signs with the zone's display name and uses the
  generic product phrase, whatever brand is configured;
- on the default zone the configured brand decides.
"""

from __future__ import annotations

from dataclasses import dataclass

from signup.domain.entities import TenantContext

PIVOTAL = "pivotal"
OSS = "oss"

GENERIC_PRODUCT_PHRASE = "an account"
GENERIC_SUBJECT = "Activate your account"
OSS_SIGNATURE = "Cloud Foundry"


@dataclass(frozen=True)
class Branding:
    product_phrase: str
    subject: str
    signature: str
    company_name: str | None = None

    @property
    def allows_marketing(self) -> bool:
        return self.company_name is not None


def resolve_branding(tenant: TenantContext, brand: str) -> Branding:
    if not tenant.is_default:
        return Branding(
            product_phrase=GENERIC_PRODUCT_PHRASE,
            subject=GENERIC_SUBJECT,
            signature=tenant.name,
        )

    if (brand or "").lower() == PIVOTAL:
        return Branding(
            product_phrase="a Pivotal ID",
            subject="Activate your Pivotal ID",
            signature="Pivotal",
            company_name="Pivotal",
        )

    return Branding(
        product_phrase=GENERIC_PRODUCT_PHRASE,
        subject=GENERIC_SUBJECT,
        signature=OSS_SIGNATURE,
    )
