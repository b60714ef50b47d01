import shipping_label_merger.pdf_io as pdf_io
import shipping_label_merger.slips as slips

import fixture_pdfs


#============================================
def test_group_carries_id_forward() -> None:
	"""
	Pages without an id inherit the last id seen.
	"""
	groups = slips.group_page_identifiers(["A", None, "B"])
	assert groups == {"A": [0, 1], "B": [2]}
	assert list(groups) == ["A", "B"]


#============================================
def test_group_drops_leading_pages() -> None:
	groups = slips.group_page_identifiers([None, None, "A", None])
	assert groups == {"A": [2, 3]}
	assert slips.group_page_identifiers([None, None]) == {}
	assert slips.group_page_identifiers([]) == {}


#============================================
def test_group_collects_scattered_pages() -> None:
	groups = slips.group_page_identifiers(["A", "B", "A", None])
	assert groups == {"A": [0, 2, 3], "B": [1]}


#============================================
def test_group_slips_from_document() -> None:
	"""
	A slip document is split into one document per order.
	"""
	slip_bytes = fixture_pdfs.build_lines_pdf(
		[
			["Order #: 111", "Order date", "Jan 22, 2026"],
			["Item 2 of 2", "Thank you!"],
			["Order #: 222"],
		]
	)
	groups = slips.group_slips(pdf_io.load_document(slip_bytes))
	assert [group.order_id for group in groups] == ["111", "222"]
	assert groups[0].page_indices == (0, 1)
	assert groups[1].page_indices == (2,)
	assert groups[0].original_name == "111_slip.pdf"
	first = pdf_io.load_document(groups[0].pdf_bytes)
	assert len(first.pages) == 2
	assert "Thank you!" in pdf_io.page_text(first.pages[1])
