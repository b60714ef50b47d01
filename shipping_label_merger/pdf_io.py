"""
Thin PDF helpers over pypdf: load, save, copy and text extraction.
"""

# Standard Library
import io

# PIP3 modules
import pypdf
import pypdf.errors

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.errors


DocumentLoadError = slm.errors.DocumentLoadError

# pypdf leaks these from extract_text on malformed fonts and streams
TEXT_EXTRACTION_ERRORS = (pypdf.errors.PyPdfError, KeyError, ValueError, TypeError)


#============================================
def load_document(pdf_bytes: bytes) -> pypdf.PdfReader:
	"""
	Load a PDF document from an in-memory buffer.

	Args:
		pdf_bytes: Raw PDF bytes.

	Returns:
		PdfReader over the buffer.
	"""
	if not pdf_bytes:
		raise DocumentLoadError("Empty PDF buffer")
	try:
		reader = pypdf.PdfReader(io.BytesIO(pdf_bytes))
		# force the page tree to parse so broken files fail here
		len(reader.pages)
	except pypdf.errors.PyPdfError as error:
		raise DocumentLoadError(f"Could not read PDF: {error}") from error
	return reader


#============================================
def first_page(reader: pypdf.PdfReader) -> pypdf.PageObject:
	"""
	Return the first page of a document.

	Args:
		reader: Loaded document.

	Returns:
		First PageObject.
	"""
	if len(reader.pages) == 0:
		raise DocumentLoadError("PDF has no pages")
	return reader.pages[0]


#============================================
def save_document(writer: pypdf.PdfWriter) -> bytes:
	"""
	Serialize a writer to bytes.

	Args:
		writer: PdfWriter to serialize.

	Returns:
		PDF bytes.
	"""
	buffer = io.BytesIO()
	writer.write(buffer)
	return buffer.getvalue()


#============================================
def page_size(page: pypdf.PageObject) -> tuple[float, float]:
	"""
	Return the (width, height) of a page's media box.
	"""
	return (float(page.mediabox.width), float(page.mediabox.height))


#============================================
def page_origin(page: pypdf.PageObject) -> tuple[float, float]:
	"""
	Return the lower-left corner of a page's media box.
	"""
	return (float(page.mediabox.left), float(page.mediabox.bottom))


#============================================
def copy_pages(reader: pypdf.PdfReader, indices: list[int]) -> pypdf.PdfWriter:
	"""
	Copy selected pages into a fresh document.

	Args:
		reader: Source document.
		indices: Page indices, in output order.

	Returns:
		New PdfWriter holding copies of the pages.
	"""
	writer = pypdf.PdfWriter()
	for index in indices:
		writer.add_page(reader.pages[index])
	return writer


#============================================
def page_text(page: pypdf.PageObject) -> str:
	"""
	Extract the text of one page.

	Extraction errors are reported and treated as an empty page.
	"""
	try:
		return page.extract_text() or ""
	except TEXT_EXTRACTION_ERRORS as error:
		print(f"Text extraction failed: {error}")
		return ""


#============================================
def page_text_in_band(page: pypdf.PageObject, y_min: float, y_max: float) -> str:
	"""
	Extract only the text whose baseline lies inside a horizontal band.

	Text drawn outside the visible media box is still present in a merged
	content stream, so a half page filters on position. Only text shown
	directly in the page content is positioned correctly; text inside a
	Form XObject is reported without the outer transform and may land in
	the wrong band, so callers must treat the result as a hint.

	Args:
		page: Page to read.
		y_min: Lower band edge in page coordinates.
		y_max: Upper band edge in page coordinates.

	Returns:
		Concatenated text fragments inside the band.
	"""
	parts: list[str] = []

	def visitor(text, cm, tm, font_dict, font_size) -> None:
		if not text:
			return
		y_value = tm[4] * cm[1] + tm[5] * cm[3] + cm[5]
		if y_min <= y_value <= y_max:
			parts.append(text)

	try:
		page.extract_text(visitor_text=visitor)
	except TEXT_EXTRACTION_ERRORS as error:
		print(f"Text extraction failed: {error}")
		return ""
	return "".join(parts)


#============================================
def document_text(reader: pypdf.PdfReader) -> str:
	"""
	Extract the text of every page, joined by newlines.
	"""
	return "\n".join(page_text(page) for page in reader.pages)


#============================================
def extract_text(pdf_bytes: bytes) -> str:
	"""
	Extract the full text of a PDF buffer.

	Args:
		pdf_bytes: Raw PDF bytes.

	Returns:
		Document text.
	"""
	reader = load_document(pdf_bytes)
	return document_text(reader)
