from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
_SCALES = ["", "Thousand", "Million", "Billion", "Trillion"]

# currency code -> (major unit, minor unit)
_CURRENCY_NAMES = {
	"INR": ("Rupees", "Paise"),
}


def _chunk_words(num: int) -> list[str]:
	words: list[str] = []
	if num >= 100:
		words += [_ONES[num // 100], "Hundred"]
		num %= 100
	if num >= 20:
		words.append(_TENS[num // 10])
		num %= 10
	if num >= 10:
		words.append(_TEENS[num - 10])
		num = 0
	if num > 0:
		words.append(_ONES[num])
	return words


def integer_to_words(num: int) -> str:
	"""Spell out a non-negative integer on the international scale (thousand, million, ...)."""
	if num < 0 or num >= 1000 ** len(_SCALES):
		raise ValueError(f"{num} is outside the range that can be written in words.")
	if num == 0:
		return "Zero"
	groups: list[str] = []
	scale = 0
	while num > 0:
		chunk = num % 1000
		if chunk:
			words = _chunk_words(chunk)
			if _SCALES[scale]:
				words.append(_SCALES[scale])
			groups.insert(0, " ".join(words))
		num //= 1000
		scale += 1
	return " ".join(groups)


def amount_in_words(amount, currency: str = "USD") -> str:
	"""Render an amount as words, e.g. `One Hundred USD and Fifty Cents Only`.

	INR uses Rupees/Paise; every other currency uses its code and Cents.
	"""
	code = (currency or "USD").upper()
	try:
		value = amount if isinstance(amount, Decimal) else Decimal(str(amount or 0))
	except (InvalidOperation, ValueError, TypeError):
		value = Decimal("0")
	value = abs(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
	if value == 0:
		return f"Zero {code}"

	whole = int(value)
	fraction = int((value - whole) * 100)
	major, minor = _CURRENCY_NAMES.get(code, (code, "Cents"))

	result = f"{integer_to_words(whole)} {major}"
	if fraction:
		result += f" and {' '.join(_chunk_words(fraction))} {minor}"
	return f"{result} Only"
