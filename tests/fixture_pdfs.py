"""
Build small text PDFs for tests with ReportLab.
"""

# Standard Library
import io

# PIP3 modules
import pypdf
import reportlab.lib.pagesizes
import reportlab.pdfgen.canvas


LETTER = reportlab.lib.pagesizes.letter
# 4x6 inch thermal label
HALF_LABEL = (288.0, 432.0)
HALF_LETTER = (612.0, 396.0)


#============================================
def build_pdf(
	pages: list[list[tuple[float, float, str]]],
	pagesize: tuple[float, float] = LETTER,
	pagesizes: list[tuple[float, float]] | None = None,
) -> bytes:
	"""
	Build a PDF with one drawString per text entry.

	Args:
		pages: Per page, a list of (x, y, text) entries.
		pagesize: Page size in points.
		pagesizes: Optional per-page sizes, overriding pagesize.

	Returns:
		PDF bytes.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=pagesize)
	for index, entries in enumerate(pages):
		if pagesizes is not None:
			pdf.setPageSize(pagesizes[index])
		pdf.setFont("Helvetica", 12)
		for x, y, text in entries:
			pdf.drawString(x, y, text)
		pdf.showPage()
	pdf.save()
	return buffer.getvalue()


#============================================
def build_lines_pdf(
	pages: list[list[str]],
	pagesize: tuple[float, float] = LETTER,
) -> bytes:
	"""
	Build a PDF with each page's lines stacked from the top.
	"""
	_width, height = pagesize
	layout: list[list[tuple[float, float, str]]] = []
	for lines in pages:
		entries = []
		for index, line in enumerate(lines):
			entries.append((36.0, height - 48.0 - index * 18.0, line))
		layout.append(entries)
	return build_pdf(layout, pagesize)


#============================================
def build_label_sheet(top_text: str | None, bottom_text: str | None) -> bytes:
	"""
	Build a letter sheet with up to two stacked labels.
	"""
	entries = []
	if top_text is not None:
		entries.append((72.0, 600.0, top_text))
	if bottom_text is not None:
		entries.append((72.0, 200.0, bottom_text))
	return build_pdf([entries], LETTER)


#============================================
def build_empty_pdf() -> bytes:
	"""
	Build a well-formed PDF with an empty page tree.
	"""
	writer = pypdf.PdfWriter()
	buffer = io.BytesIO()
	writer.write(buffer)
	return buffer.getvalue()
