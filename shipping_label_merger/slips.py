"""
Group a multi-order packing slip document into per-order page runs.
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


SLIP_NAME_SUFFIX = slm.config.SLIP_NAME_SUFFIX


@dataclasses.dataclass(frozen=True)
class SlipGroup:
	order_id: str
	page_indices: tuple[int, ...]
	pdf_bytes: bytes

	@property
	def original_name(self) -> str:
		return f"{self.order_id}{SLIP_NAME_SUFFIX}"


#============================================
def group_page_identifiers(ids_per_page: list[str | None]) -> dict[str, list[int]]:
	"""
	Fold per-page order ids into page lists, carrying the last id forward.

	Only the first page of an order's slip shows its id; following pages
	belong to the same order until a new id appears. Pages before the first
	id are dropped. Must run in ascending page order.

	Args:
		ids_per_page: Order id found on each page, or None.

	Returns:
		Mapping of order id to page indices, in first-seen order.
	"""
	order_pages: dict[str, list[int]] = {}
	current_order_id = None
	for index, order_id in enumerate(ids_per_page):
		if order_id:
			current_order_id = order_id
		if current_order_id is None:
			continue
		order_pages.setdefault(current_order_id, []).append(index)
	return order_pages


#============================================
def group_slips(reader: pypdf.PdfReader, verbose: bool = False) -> list[SlipGroup]:
	"""
	Split a slip document into one document per order.

	Args:
		reader: Slip document.
		verbose: Print the page count per group.

	Returns:
		List of SlipGroup in first-seen order.
	"""
	ids_per_page = [
		slm.identifiers.find_first_identifier(slm.pdf_io.page_text(page))
		for page in reader.pages
	]
	order_pages = group_page_identifiers(ids_per_page)

	groups: list[SlipGroup] = []
	for order_id, indices in order_pages.items():
		writer = slm.pdf_io.copy_pages(reader, indices)
		groups.append(
			SlipGroup(
				order_id=order_id,
				page_indices=tuple(indices),
				pdf_bytes=slm.pdf_io.save_document(writer),
			)
		)
		if verbose:
			print(f"Grouped {len(indices)} pages for slip {order_id}")
	return groups
