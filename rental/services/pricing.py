from rental.schemas.quote import Quote, QuoteRequest

EXTRA_HOUR_RATE = 100_000

# (minimum rental days, discount percent), highest threshold first
DISCOUNT_TIERS = (
    (10, 25),
    (7, 20),
    (4, 10),
)


def discount_percent(rental_days: int) -> int:
    for min_days, percent in DISCOUNT_TIERS:
        if rental_days >= min_days:
            return percent
    return 0


def calculate_quote(price_per_day: int, rental_days: int, extra_hours: int = 0) -> Quote:
    """Price breakdown for renting a vehicle.

    Amounts are whole currency units; the discount is rounded half-up so the
    total matches what is displayed and stored.
    """
    subtotal = price_per_day * rental_days
    percent = discount_percent(rental_days)
    discount_amount = (subtotal * percent + 50) // 100
    extra_hours_cost = extra_hours * EXTRA_HOUR_RATE

    return Quote(
        price_per_day=price_per_day,
        rental_days=rental_days,
        extra_hours=extra_hours,
        subtotal=subtotal,
        discount_percent=percent,
        discount_amount=discount_amount,
        extra_hours_cost=extra_hours_cost,
        total=subtotal - discount_amount + extra_hours_cost,
    )


def quote_for_request(price_per_day: int, req: QuoteRequest) -> Quote:
    return calculate_quote(price_per_day, req.rental_days, req.extra_hours)


def format_currency(amount: int) -> str:
    # Indonesian grouping: Rp 1.350.000
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")
