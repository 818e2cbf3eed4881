# gst_billing/domain/services/interstate.py

from __future__ import annotations

import logging

from gst_billing.domain.services.gstin_validation import mask_gstin, validate_gstin_with_details

logger = logging.getLogger("interstate")


def determine_interstate(
    shop_gstin: str | None,
    customer_gstin: str | None,
    auto_detect: bool = True,
) -> bool:
    """
    Decide IGST (interstate) vs CGST+SGST (intrastate).

    Intrastate unless auto-detection is on, both sides have a usable GSTIN and
    the two state codes differ. A customer GSTIN that fails validation counts
    as absent (B2C / walk-in).
    """
    if not auto_detect:
        return False

    shop = validate_gstin_with_details(shop_gstin)
    if not shop.is_valid:
        return False

    customer = validate_gstin_with_details(customer_gstin)
    if not customer.is_valid:
        if customer_gstin:
            logger.debug(
                "Customer GSTIN %s unusable (%s), treating as intrastate",
                mask_gstin(customer.clean_gstin), customer.error_message,
            )
        return False

    return shop.state_code != customer.state_code
