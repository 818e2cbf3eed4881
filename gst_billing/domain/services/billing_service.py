# gst_billing/domain/services/billing_service.py
"""
Invoice build pipeline.

``BillingService.build_invoice`` turns an ``InvoiceRequest`` into a fully
computed ``InvoiceWithDetails``:

1. Fetch the active shop configuration (missing = fatal)
2. Resolve the GST mode and validate the customer GSTIN (advisory only)
3. Decide intrastate vs interstate
4. Resolve one rate per line, only if the mode charges tax
5. Line discounts, then the bill-level discount spread over the lines
6. Per-line taxes, invoice totals, rounding
7. Invoice number, amount in words, compliance record

All collaborator I/O happens before any arithmetic, so a failed lookup never
leaves a half-built invoice. The service holds no mutable state.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from gst_billing.domain.models.gst import GSTConfiguration, GSTINValidationResult, GSTRate
from gst_billing.domain.models.invoice import (
    Invoice,
    InvoiceGSTSummary,
    InvoiceLineItemRequest,
    InvoiceRequest,
    InvoiceWithDetails,
)
from gst_billing.domain.services import gst_breakdown
from gst_billing.domain.services.amount_in_words import IndianAmountToWords
from gst_billing.domain.services.collaborators import (
    AmountToWords,
    Clock,
    ConfigurationProvider,
    RateLookup,
    utc_now,
)
from gst_billing.domain.services.gst_mode import (
    determine_display_mode,
    resolve_gst_mode,
    show_gst_summary,
)
from gst_billing.domain.services.gstin_validation import mask_gstin, validate_gstin_with_details
from gst_billing.domain.services.interstate import determine_interstate
from gst_billing.domain.services.invoice_aggregator import (
    allocate_global_discount,
    calculate_invoice_totals,
    calculate_weighted_average_rate,
    compute_global_discount,
)
from gst_billing.domain.services.invoice_number import generate_invoice_number
from gst_billing.domain.services.line_item_calculator import (
    calculate_line_item,
    compute_line_discount,
    compute_line_subtotal,
)
from gst_billing.domain.services.money import ZERO, money_sum

logger = logging.getLogger("billing_service")


class InvoiceBuildError(Exception):
    pass


class GSTConfigurationNotFoundError(InvoiceBuildError):
    pass


class NegativeTaxableAmountError(InvoiceBuildError):
    pass


class BillingService:
    """Stateless invoice builder, parameterised by its collaborators."""

    def __init__(
        self,
        config_provider: ConfigurationProvider,
        rate_lookup: RateLookup,
        amount_to_words: AmountToWords | None = None,
        clock: Clock | None = None,
        strict_gstin_checksum: bool = False,
    ) -> None:
        self._config_provider = config_provider
        self._rate_lookup = rate_lookup
        self._amount_to_words = amount_to_words or IndianAmountToWords()
        self._clock = clock or utc_now
        self._strict_gstin_checksum = strict_gstin_checksum

    # ---- Collaborator I/O ----

    async def _load_configuration(self) -> GSTConfiguration:
        config = await self._config_provider.get_active_configuration()
        if config is None:
            raise GSTConfigurationNotFoundError("No active GST configuration found")
        return config

    async def _resolve_rates(
        self,
        items: list[InvoiceLineItemRequest],
        config: GSTConfiguration,
    ) -> list[GSTRate]:
        """Product/HSN rate, else the category default, else the configured flat rate."""
        fallback: GSTRate | None = None
        rates: list[GSTRate] = []

        for item in items:
            rate = await self._rate_lookup.get_rate_for_product(item.product_id, item.hsn_code)
            if rate is None:
                if fallback is None:
                    fallback = await self._rate_lookup.get_default_rate(config.default_gst_category)
                    if fallback is None:
                        fallback = GSTRate.from_total(config.default_gst_rate)
                logger.debug(
                    "No rate for product %s (HSN %s), using default %s%%",
                    item.product_id, item.hsn_code, fallback.gst_rate,
                )
                rate = fallback
            rates.append(rate)
        return rates

    def _validate_customer_gstin(
        self, request: InvoiceRequest, warnings: list[str],
    ) -> GSTINValidationResult | None:
        if not request.customer_gstin or not request.customer_gstin.strip():
            return None

        result = validate_gstin_with_details(request.customer_gstin, strict=self._strict_gstin_checksum)
        if not result.is_valid:
            logger.warning(
                "Invalid customer GSTIN %s on transaction %s: %s",
                mask_gstin(result.clean_gstin), request.transaction_id, result.error_message,
            )
            warnings.append(f"Invalid customer GSTIN: {result.error_message}")
        return result

    # ---- Public API ----

    async def build_invoice(self, request: InvoiceRequest) -> InvoiceWithDetails:
        """
        Build a complete invoice.

        Raises ``GSTConfigurationNotFoundError`` when the shop has no active
        configuration, ``NegativeTaxableAmountError`` when a discount exceeds
        the value it applies to. Lookup failures propagate unchanged.
        """
        config = await self._load_configuration()
        mode = resolve_gst_mode(config, request.override_gst_mode)
        warnings: list[str] = []

        customer_check = self._validate_customer_gstin(request, warnings)
        customer_ok = customer_check is not None and customer_check.is_valid
        is_interstate = determine_interstate(
            config.shop_gstin,
            customer_check.clean_gstin if customer_ok else None,
            config.auto_detect_interstate,
        )

        items = request.line_items
        if mode.applies_tax:
            rates: list[GSTRate | None] = list(await self._resolve_rates(items, config))
        else:
            rates = [None] * len(items)

        # Line-level discounts
        subtotals = [compute_line_subtotal(item) for item in items]
        own_discounts = [compute_line_discount(item, sub) for item, sub in zip(items, subtotals)]
        for item, sub, disc in zip(items, subtotals, own_discounts):
            if item.has_conflicting_discounts:
                logger.warning(
                    "Product %s has both a discount amount and a percentage; using %s%%",
                    item.product_id, item.discount_percentage,
                )
                warnings.append(
                    f"{item.product_name}: both discount amount and percentage given, "
                    f"percentage ({item.discount_percentage}%) applied"
                )
            if disc > sub:
                raise NegativeTaxableAmountError(
                    f"Discount {disc} on {item.product_name!r} exceeds line value {sub}"
                )

        # Bill-level discount, spread over the lines before tax
        bases = [sub - disc for sub, disc in zip(subtotals, own_discounts)]
        after_line_discounts = money_sum(bases)
        global_discount = compute_global_discount(
            after_line_discounts, request.global_discount, request.global_discount_type,
        )
        if global_discount > after_line_discounts:
            raise NegativeTaxableAmountError(
                f"Bill discount {global_discount} exceeds amount after line discounts {after_line_discounts}"
            )
        shares = allocate_global_discount(bases, global_discount)

        line_items = [
            calculate_line_item(item, rate=rate, is_interstate=is_interstate, global_discount_share=share)
            for item, rate, share in zip(items, rates, shares)
        ]
        totals = calculate_invoice_totals(line_items, global_discount, config.round_off_gst)

        now = self._clock()
        show_to_customer, display_mode = determine_display_mode(mode)

        invoice = Invoice(
            invoice_number=generate_invoice_number(request.invoice_type, now),
            transaction_id=request.transaction_id,
            customer_id=request.customer_id,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_gstin=request.customer_gstin,
            customer_address=request.customer_address,
            customer_state_code=customer_check.state_code if customer_ok else None,
            invoice_date=request.invoice_date or now,
            due_date=request.due_date,
            subtotal_amount=totals.subtotal,
            line_discount_amount=totals.line_discount_amount,
            global_discount_amount=totals.global_discount_amount,
            discount_amount=totals.discount_amount,
            discount_percentage=request.global_discount_percentage,
            taxable_amount=totals.taxable_amount,
            gst_config_id=config.config_id,
            gst_mode=mode,
            is_interstate=is_interstate,
            shop_gstin=config.shop_gstin,
            shop_state_code=config.shop_state_code or config.state_code_from_gstin,
            cgst_amount=totals.cgst_amount,
            sgst_amount=totals.sgst_amount,
            igst_amount=totals.igst_amount,
            cess_amount=totals.cess_amount,
            total_gst_amount=totals.total_gst_amount,
            gst_rate_applied=calculate_weighted_average_rate(line_items),
            round_off_amount=totals.round_off_amount,
            grand_total=totals.grand_total,
            amount_in_words=self._amount_to_words.convert(totals.grand_total),
            payment_method=request.payment_method,
            payment_status=request.payment_status,
            amount_paid=request.amount_paid,
            amount_due=totals.grand_total - request.amount_paid,
            show_gstin=config.show_gstin_on_invoice and mode.shows_gstin,
            show_gst_summary=show_gst_summary(mode, config),
            include_gst_in_price=config.include_gst_in_price,
            show_gst_to_customer=show_to_customer,
            gst_display_mode=display_mode,
            invoice_type=request.invoice_type,
            place_of_supply=request.place_of_supply,
            terms_and_conditions=request.terms_and_conditions,
            notes=request.notes,
            created_at=now,
            created_by=request.created_by,
        )

        gst_details = None
        if mode.applies_tax:
            gst_details = gst_breakdown.create_invoice_gst_details(invoice, line_items)

        logger.info(
            "Built invoice %s for transaction %s: %d lines, mode=%s, interstate=%s, total=%s",
            invoice.invoice_number, request.transaction_id, len(line_items),
            mode.value, is_interstate, invoice.grand_total,
        )

        return InvoiceWithDetails(
            invoice=invoice,
            line_items=line_items,
            gst_configuration=config,
            gst_details=gst_details,
            customer_gstin_validation=customer_check,
            warnings=warnings,
        )

    def generate_gst_summary(self, result: InvoiceWithDetails) -> InvoiceGSTSummary:
        return gst_breakdown.generate_gst_summary(result.invoice, result.line_items)


def validate_calculation(result: InvoiceWithDetails) -> list[str]:
    """
    Consistency checks on a built invoice.

    Returns human-readable problems; an empty list means the invoice is
    consistent. Never raises.
    """
    problems: list[str] = []
    invoice = result.invoice
    config = result.gst_configuration

    if invoice.gst_mode.applies_tax and not config.is_gst_registered:
        problems.append(f"GSTIN is required for {invoice.gst_mode.display_name}")

    check = result.customer_gstin_validation
    if check is not None and not check.is_valid:
        problems.append(f"Invalid customer GSTIN: {check.error_message}")

    if invoice.taxable_amount < 0:
        problems.append("Taxable amount cannot be negative")
    if invoice.grand_total < 0:
        problems.append("Grand total cannot be negative")

    components = invoice.cgst_amount + invoice.sgst_amount + invoice.igst_amount + invoice.cess_amount
    if components != invoice.total_gst_amount:
        problems.append(
            f"GST components {components} do not add up to total GST {invoice.total_gst_amount}"
        )

    expected_total = invoice.taxable_amount + invoice.total_gst_amount + invoice.round_off_amount
    if expected_total != invoice.grand_total:
        problems.append(f"Grand total {invoice.grand_total} does not match computed {expected_total}")

    if result.gst_details is not None:
        entries = gst_breakdown.parse_rate_breakdown(result.gst_details.gst_rate_breakdown)
        breakdown_tax = sum((tax for _, _, tax in entries), ZERO)
        if breakdown_tax != invoice.total_gst_amount:
            problems.append(
                f"Rate breakdown tax {breakdown_tax} does not match total GST {invoice.total_gst_amount}"
            )

    line_taxable = sum((line.taxable_amount for line in result.line_items), Decimal("0"))
    if line_taxable != invoice.taxable_amount:
        problems.append(
            f"Line taxable values {line_taxable} do not match invoice taxable {invoice.taxable_amount}"
        )

    return problems
