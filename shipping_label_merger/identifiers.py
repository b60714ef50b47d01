"""
Order identifier and shipment metadata extraction from page text.
"""

# Standard Library
import dataclasses
import datetime
import re
import typing

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.config


SourceKind = slm.config.SourceKind

PLACEHOLDER = slm.config.PLACEHOLDER
SLIP_MARKER = slm.config.SLIP_MARKER

TIKTOK_ID_PATTERN = re.compile(r"Order ID:\s*(\d+)", re.IGNORECASE)
TIKTOK_ALNUM_ID_PATTERN = re.compile(r"Order ID:\s*([A-Za-z0-9]+)", re.IGNORECASE)
# digits only, so a trailing "Buyer" heading is never captured
ORDER_ID_PATTERN = re.compile(r"Order\s*(?:#|ID)[:\s]*(\d+)", re.IGNORECASE)
ORDER_DATE_PATTERN = re.compile(r"Order date\s*\n\s*([A-Za-z]{3}\s\d{1,2},\s\d{4})", re.IGNORECASE)
TRACKING_PATTERN = re.compile(r"Tracking\s*\n\s*(\d+)", re.IGNORECASE)
BUYER_PATTERN = re.compile(r"Buyer[:\s]+(.*?)\s*\(([^)]+)\)", re.IGNORECASE)

ORDER_DATE_PARTS_PATTERN = re.compile(r"([A-Za-z]{3})\s+(\d{1,2}),\s*(\d{4})")
ORDER_DATE_OUTPUT_FORMAT = "%m/%d/%Y"

# slips are printed in English regardless of the host locale
MONTH_ABBREVIATIONS = {
	"jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
	"jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


@dataclasses.dataclass(frozen=True)
class ExtractedMetadata:
	order_id: str
	source_kind: SourceKind
	date: str = PLACEHOLDER
	tracking: str = PLACEHOLDER
	buyer_name: str = PLACEHOLDER
	buyer_username: str = PLACEHOLDER

	def as_dict(self) -> dict[str, str]:
		return {
			"orderId": self.order_id,
			"type": self.source_kind.value,
			"date": self.date,
			"tracking": self.tracking,
			"buyerName": self.buyer_name,
			"buyerUsername": self.buyer_username,
		}


@dataclasses.dataclass(frozen=True)
class ExtractionRule:
	"""
	One vendor format: an id pattern plus optional field enrichment.
	"""
	name: str
	source_kind: SourceKind
	pattern: re.Pattern
	enrich: typing.Callable[[str], dict[str, str]] | None = None


#============================================
def format_order_date(raw_date: str) -> str:
	"""
	Reformat an order date like "Jan 22, 2026" to "01/22/2026".

	Args:
		raw_date: Captured date string.

	Returns:
		Formatted date, or the raw string when it does not parse.
	"""
	match = ORDER_DATE_PARTS_PATTERN.fullmatch(raw_date.strip())
	if match is None:
		return raw_date
	month = MONTH_ABBREVIATIONS.get(match.group(1).lower())
	if month is None:
		return raw_date
	try:
		parsed = datetime.date(int(match.group(3)), month, int(match.group(2)))
	except ValueError:
		return raw_date
	return parsed.strftime(ORDER_DATE_OUTPUT_FORMAT)


#============================================
def extract_order_date(text: str) -> str:
	match = ORDER_DATE_PATTERN.search(text)
	if match is None:
		return PLACEHOLDER
	return format_order_date(match.group(1).strip())


#============================================
def extract_tracking(text: str) -> str:
	match = TRACKING_PATTERN.search(text)
	if match is None:
		return PLACEHOLDER
	return match.group(1).strip()


#============================================
def extract_buyer(text: str) -> tuple[str, str]:
	"""
	Extract the buyer name and parenthesized username.

	Args:
		text: Slip text, e.g. "Buyer\\nJane Doe\\n(janedoe)".

	Returns:
		Tuple of (name, username), placeholders when absent.
	"""
	match = BUYER_PATTERN.search(text)
	if match is None:
		return (PLACEHOLDER, PLACEHOLDER)
	return (match.group(1).strip(), match.group(2).strip())


#============================================
def enrich_etsy(text: str) -> dict[str, str]:
	"""
	Collect the optional Etsy slip fields.
	"""
	buyer_name, buyer_username = extract_buyer(text)
	return {
		"date": extract_order_date(text),
		"tracking": extract_tracking(text),
		"buyer_name": buyer_name,
		"buyer_username": buyer_username,
	}


TIKTOK_RULE = ExtractionRule(name="tiktok", source_kind=SourceKind.TIKTOK, pattern=TIKTOK_ID_PATTERN)
TIKTOK_ALNUM_RULE = ExtractionRule(name="tiktok", source_kind=SourceKind.TIKTOK, pattern=TIKTOK_ALNUM_ID_PATTERN)
ETSY_RULE = ExtractionRule(name="etsy", source_kind=SourceKind.ETSY, pattern=ORDER_ID_PATTERN, enrich=enrich_etsy)

EXTRACTION_RULES = (TIKTOK_RULE, ETSY_RULE)
ALNUM_EXTRACTION_RULES = (TIKTOK_ALNUM_RULE, ETSY_RULE)


#============================================
def apply_rule(rule: ExtractionRule, text: str) -> ExtractedMetadata | None:
	"""
	Run one extraction rule against text.

	Args:
		rule: Rule to apply.
		text: Page or document text.

	Returns:
		ExtractedMetadata, or None when the id pattern does not match.
	"""
	match = rule.pattern.search(text)
	if match is None:
		return None
	fields: dict[str, str] = {}
	if rule.enrich is not None:
		fields = rule.enrich(text)
	return ExtractedMetadata(
		order_id=match.group(1).strip(),
		source_kind=rule.source_kind,
		**fields,
	)


#============================================
def extract_metadata_from_text(
	text: str,
	alphanumeric_ids: bool = False,
	rules: tuple[ExtractionRule, ...] | None = None,
) -> ExtractedMetadata | None:
	"""
	Extract order metadata using the first matching rule.

	Args:
		text: Page or document text.
		alphanumeric_ids: Accept letters in TikTok order ids.
		rules: Optional rule table override, evaluated in order.

	Returns:
		ExtractedMetadata, or None when no rule matches.
	"""
	if not text:
		return None
	if rules is None:
		rules = ALNUM_EXTRACTION_RULES if alphanumeric_ids else EXTRACTION_RULES
	for rule in rules:
		metadata = apply_rule(rule, text)
		if metadata is not None:
			return metadata
	return None


#============================================
def placeholder_metadata() -> ExtractedMetadata:
	"""
	Metadata used when a slip carries no recognizable order id.
	"""
	return ExtractedMetadata(order_id=PLACEHOLDER, source_kind=SourceKind.UNKNOWN)


#============================================
def find_identifiers_in_text(text: str) -> list[str]:
	"""
	Find every order id in text, in textual order.

	Args:
		text: Page or document text.

	Returns:
		List of order ids, duplicates kept.
	"""
	if not text:
		return []
	return [match.group(1) for match in ORDER_ID_PATTERN.finditer(text)]


#============================================
def find_first_identifier(text: str) -> str | None:
	match = ORDER_ID_PATTERN.search(text or "")
	if match is None:
		return None
	return match.group(1)


#============================================
def has_slip_marker(text: str, marker: str = SLIP_MARKER) -> bool:
	"""
	Check for the shop watermark that only appears on packing slips.
	"""
	return bool(text) and marker in text
