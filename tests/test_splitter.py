import shipping_label_merger.pdf_io as pdf_io
import shipping_label_merger.reconcile as reconcile
import shipping_label_merger.splitter as splitter

import fixture_pdfs


#============================================
def _half_boxes(pdf_bytes: bytes) -> list[tuple[float, float, float, float]]:
	reader = pdf_io.load_document(pdf_bytes)
	boxes = []
	for page in reader.pages:
		box = page.mediabox
		boxes.append((float(box.left), float(box.bottom), float(box.right), float(box.top)))
	return boxes


#============================================
def test_split_produces_half_height_pages() -> None:
	"""
	Both halves keep the sheet width and take half its height.
	"""
	sheet = pdf_io.load_document(fixture_pdfs.build_label_sheet("Order #: 111", "Order #: 222"))
	top_bytes, bottom_bytes = splitter.split_page_bytes(sheet.pages[0])
	assert _half_boxes(top_bytes) == [(0.0, 0.0, 612.0, 396.0)]
	assert _half_boxes(bottom_bytes) == [(0.0, 0.0, 612.0, 396.0)]


#============================================
def test_split_is_idempotent_on_geometry() -> None:
	sheet = pdf_io.load_document(fixture_pdfs.build_label_sheet("Order #: 111", "Order #: 222"))
	first = splitter.split_page_bytes(sheet.pages[0])
	second = splitter.split_page_bytes(sheet.pages[0])
	for one, two in zip(first, second):
		assert _half_boxes(one) == _half_boxes(two)
		assert reconcile.half_page_identifiers(one) == reconcile.half_page_identifiers(two)


#============================================
def test_split_places_each_label_in_its_half() -> None:
	"""
	The upper label is visible on the top half, the lower on the bottom half.
	"""
	sheet = pdf_io.load_document(fixture_pdfs.build_label_sheet("Order #: 111", "Order #: 222"))
	top_bytes, bottom_bytes = splitter.split_page_bytes(sheet.pages[0])
	assert reconcile.half_page_identifiers(top_bytes) == ["111"]
	assert reconcile.half_page_identifiers(bottom_bytes) == ["222"]


#============================================
def test_split_does_not_touch_source_page() -> None:
	sheet = pdf_io.load_document(fixture_pdfs.build_label_sheet("Order #: 111", None))
	page = sheet.pages[0]
	splitter.split_page(page)
	assert pdf_io.page_size(page) == (612.0, 792.0)
	assert "111" in pdf_io.page_text(page)
