"""
Assign order ids to the top and bottom labels of a two-label sheet.

Per-half text extraction is unreliable near the cut line, so the whole-page
id list is the fallback. The whole-page list is assumed to follow visual
top-to-bottom order.
"""

# Standard Library
import dataclasses

# PIP3 modules
import pypdf

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.config
import shipping_label_merger.identifiers
import shipping_label_merger.pdf_io
import shipping_label_merger.splitter


LabelPosition = slm.config.LabelPosition
LabelPlacement = slm.config.LabelPlacement


@dataclasses.dataclass(frozen=True)
class HalfAssignment:
	top: str | None
	bottom: str | None


@dataclasses.dataclass(frozen=True)
class ExtractedHalf:
	order_id: str
	position: LabelPosition
	pdf_bytes: bytes
	page_index: int = 0


#============================================
def reconcile_identifiers(
	page_ids: list[str],
	top_ids: list[str],
	bottom_ids: list[str],
) -> HalfAssignment:
	"""
	Decide which order id belongs to each half of a sheet.

	Args:
		page_ids: Ids found on the whole page, in textual order.
		top_ids: Ids found on the top half.
		bottom_ids: Ids found on the bottom half.

	Returns:
		HalfAssignment; a side is None when no id could be assigned.
	"""
	top_id = None
	if top_ids:
		top_id = top_ids[0]
	elif page_ids:
		top_id = page_ids[0]

	bottom_id = None
	if bottom_ids:
		bottom_id = bottom_ids[0]
	elif len(page_ids) >= 2:
		bottom_id = page_ids[1]

	if top_id is not None and top_id == bottom_id:
		distinct_ids = list(dict.fromkeys(page_ids))
		if len(distinct_ids) >= 2:
			top_id = distinct_ids[0]
			bottom_id = distinct_ids[1]
		else:
			# a single label never yields two halves with one id
			bottom_id = None

	return HalfAssignment(top=top_id, bottom=bottom_id)


#============================================
def half_page_identifiers(pdf_bytes: bytes) -> list[str]:
	"""
	Find the order ids visible on a half-page document.
	"""
	reader = slm.pdf_io.load_document(pdf_bytes)
	page = slm.pdf_io.first_page(reader)
	_width, height = slm.pdf_io.page_size(page)
	_origin_x, origin_y = slm.pdf_io.page_origin(page)
	text = slm.pdf_io.page_text_in_band(page, origin_y, origin_y + height)
	return slm.identifiers.find_identifiers_in_text(text)


#============================================
def extract_halves(
	page: pypdf.PageObject,
	page_index: int = 0,
	verbose: bool = False,
) -> list[ExtractedHalf]:
	"""
	Split one sheet page and tag each half with its order id.

	Args:
		page: Sheet page.
		page_index: Index of the page in its document, for reporting.
		verbose: Print the ids found and the fallbacks taken.

	Returns:
		Zero, one or two ExtractedHalf records, top first.
	"""
	page_ids = slm.identifiers.find_identifiers_in_text(slm.pdf_io.page_text(page))
	top_bytes, bottom_bytes = slm.splitter.split_page_bytes(page)
	top_ids = half_page_identifiers(top_bytes)
	bottom_ids = half_page_identifiers(bottom_bytes)
	assignment = reconcile_identifiers(page_ids, top_ids, bottom_ids)

	if verbose:
		print(f"Page {page_index + 1}: page ids {', '.join(page_ids) or '-'}")
		print(f"  top ids {', '.join(top_ids) or '-'}, bottom ids {', '.join(bottom_ids) or '-'}")
		if assignment.top is not None and not top_ids:
			print(f"  top id {assignment.top} taken from the page list")
		if assignment.bottom is not None and not bottom_ids:
			print(f"  bottom id {assignment.bottom} taken from the page list")

	halves: list[ExtractedHalf] = []
	if assignment.top is not None:
		halves.append(ExtractedHalf(assignment.top, LabelPosition.TOP, top_bytes, page_index))
	if assignment.bottom is not None:
		halves.append(ExtractedHalf(assignment.bottom, LabelPosition.BOTTOM, bottom_bytes, page_index))
	return halves


#============================================
def detect_placement(
	label_ids: list[str],
	target_id: str | None,
	unmatched_placement: LabelPlacement | None = slm.config.UNMATCHED_LABEL_PLACEMENT,
) -> LabelPlacement:
	"""
	Guess where the wanted label sits on a full sheet from its text.

	Args:
		label_ids: Order ids found on the label page, in textual order.
		target_id: Order id of the matching slip, if known.
		unmatched_placement: Placement used when ids exist but none is the
			target. None leaves the label standalone.

	Returns:
		LabelPlacement for the crop.
	"""
	if not label_ids:
		return LabelPlacement.STANDALONE
	if target_id is None:
		return LabelPlacement.BULK_TOP
	if target_id in label_ids:
		if label_ids.index(target_id) == 1:
			return LabelPlacement.BULK_BOTTOM
		return LabelPlacement.BULK_TOP
	if unmatched_placement is None:
		return LabelPlacement.STANDALONE
	return unmatched_placement
