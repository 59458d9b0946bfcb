"""Fixed credit package catalog.

Purchases are simulated: selecting a package grants its credits without any
payment capture.
"""

from src.mn_common.enums import CreditPackageId
from src.mn_common.errors import UnknownCreditPackageError
from src.mn_credit.domain.models import CreditPackage

CREDIT_PACKAGES: tuple[CreditPackage, ...] = (
    CreditPackage(
        id=CreditPackageId.SMALL.value,
        name="Starter",
        credits=5,
        price_cents=200,
        description="Perfect for trying out the AI features",
    ),
    CreditPackage(
        id=CreditPackageId.MEDIUM.value,
        name="Professional",
        credits=15,
        price_cents=500,
        description="Great for regular medical documentation",
        popular=True,
    ),
    CreditPackage(
        id=CreditPackageId.LARGE.value,
        name="Premium",
        credits=35,
        price_cents=1000,
        description="Best value for heavy usage",
    ),
)

_BY_ID = {pkg.id: pkg for pkg in CREDIT_PACKAGES}


def get_package(package_id: str) -> CreditPackage:
    """Look up a package by selector, raising UnknownCreditPackageError."""
    try:
        return _BY_ID[package_id]
    except KeyError:
        raise UnknownCreditPackageError(package_id) from None
