"""
Split a two-label sheet into top and bottom half-page documents.
"""

# PIP3 modules
import pypdf

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.pdf_io


#============================================
def build_half_document(
	page: pypdf.PageObject,
	y_shift: float,
) -> pypdf.PdfWriter:
	"""
	Place a full page on a half-height canvas.

	Args:
		page: Source sheet page.
		y_shift: Vertical translation applied to the sheet content.

	Returns:
		Single-page PdfWriter of size (width, height / 2).
	"""
	width, height = slm.pdf_io.page_size(page)
	origin_x, origin_y = slm.pdf_io.page_origin(page)
	writer = pypdf.PdfWriter()
	blank = pypdf.PageObject.create_blank_page(width=width, height=height / 2.0)
	writer.add_page(blank)
	transform = pypdf.Transformation().translate(-origin_x, y_shift - origin_y)
	writer.pages[-1].merge_transformed_page(page, transform)
	return writer


#============================================
def split_page(page: pypdf.PageObject) -> tuple[pypdf.PdfWriter, pypdf.PdfWriter]:
	"""
	Split a sheet page into independent top and bottom half documents.

	The top half is the sheet shifted down by half its height so the upper
	content lands in the visible band; the bottom half is drawn unshifted.

	Args:
		page: Source sheet page.

	Returns:
		Tuple of (top_document, bottom_document).
	"""
	_width, height = slm.pdf_io.page_size(page)
	top_document = build_half_document(page, -height / 2.0)
	bottom_document = build_half_document(page, 0.0)
	return (top_document, bottom_document)


#============================================
def split_page_bytes(page: pypdf.PageObject) -> tuple[bytes, bytes]:
	"""
	Split a sheet page and serialize both halves.
	"""
	top_document, bottom_document = split_page(page)
	return (
		slm.pdf_io.save_document(top_document),
		slm.pdf_io.save_document(bottom_document),
	)
