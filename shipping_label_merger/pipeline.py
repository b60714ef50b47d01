"""
Merge shipping labels with their order slips.

Single pairs, bulk label sheets with bulk slip documents, and batches of
named files are handled here. Inputs and outputs are byte buffers.
"""

# Standard Library
import dataclasses

# PIP3 modules
import pypdf
import pypdf.errors

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.config
import shipping_label_merger.crop
import shipping_label_merger.errors
import shipping_label_merger.identifiers
import shipping_label_merger.pdf_io
import shipping_label_merger.reconcile
import shipping_label_merger.slips


ExtractedMetadata = slm.identifiers.ExtractedMetadata
ExtractedHalf = slm.reconcile.ExtractedHalf
SlipGroup = slm.slips.SlipGroup
MergeOptions = slm.config.MergeOptions
LayoutKind = slm.config.LayoutKind
LabelPlacement = slm.config.LabelPlacement
SourceKind = slm.config.SourceKind
LabelMergeError = slm.errors.LabelMergeError

BULK_DETECT_MIN_HEIGHT = slm.config.BULK_DETECT_MIN_HEIGHT
FALLBACK_FILENAME = slm.config.FALLBACK_FILENAME
LABEL_NAME_TOKEN = slm.config.LABEL_NAME_TOKEN

# failures that only abort the current pair in a batch
ITEM_ERRORS = (LabelMergeError, pypdf.errors.PyPdfError)


@dataclasses.dataclass(frozen=True)
class MergeResult:
	pdf_bytes: bytes
	filename: str
	metadata: ExtractedMetadata


@dataclasses.dataclass
class BatchResult:
	results: list[MergeResult] = dataclasses.field(default_factory=list)
	errors: list[str] = dataclasses.field(default_factory=list)


#============================================
def resolve_placement(
	label_reader: pypdf.PdfReader,
	label_height: float,
	slip_metadata: ExtractedMetadata | None,
	options: MergeOptions,
	verbose: bool = False,
) -> LabelPlacement:
	"""
	Pick the crop placement for the label page.

	An explicit bulk request wins. Otherwise tall pages are scanned for
	order ids to tell a two-label sheet from a single label.

	Args:
		label_reader: Label document.
		label_height: Height of the label page.
		slip_metadata: Metadata of the slip, if any.
		options: Merge options.
		verbose: Print the detection outcome.

	Returns:
		LabelPlacement.
	"""
	if options.force_bulk:
		return slm.crop.placement_for_position(options.position)
	if not options.auto_detect or label_height <= BULK_DETECT_MIN_HEIGHT:
		return LabelPlacement.STANDALONE

	label_text = slm.pdf_io.document_text(label_reader)
	label_ids = slm.identifiers.find_identifiers_in_text(label_text)
	target_id = slip_metadata.order_id if slip_metadata is not None else None
	placement = slm.reconcile.detect_placement(
		label_ids,
		target_id,
		options.unmatched_placement,
	)
	if verbose and label_ids:
		print(f"Label sheet ids: {', '.join(label_ids)}")
		if target_id is not None and target_id not in label_ids:
			print(f"Order {target_id} not on label sheet, using {placement.value}")
		else:
			print(f"Auto-detected placement: {placement.value}")
	return placement


#============================================
def build_filename(metadata: ExtractedMetadata | None) -> str:
	if metadata is None:
		return FALLBACK_FILENAME
	if metadata.source_kind in (SourceKind.ETSY, SourceKind.TIKTOK):
		return metadata.order_id
	return FALLBACK_FILENAME


#============================================
def merge_one(
	label_bytes: bytes,
	slip_bytes: bytes,
	options: MergeOptions | None = None,
	verbose: bool = False,
) -> MergeResult:
	"""
	Merge a cropped, rotated label page with every page of its slip.

	Args:
		label_bytes: Shipping label PDF; only its first page is used.
		slip_bytes: Order slip PDF.
		options: Optional placement overrides.
		verbose: Print layout decisions.

	Returns:
		MergeResult with the merged PDF, filename and slip metadata.
	"""
	if options is None:
		options = MergeOptions()
	label_reader = slm.pdf_io.load_document(label_bytes)
	slip_reader = slm.pdf_io.load_document(slip_bytes)
	slip_metadata = slm.identifiers.extract_metadata_from_text(
		slm.pdf_io.document_text(slip_reader),
		alphanumeric_ids=options.alphanumeric_ids,
	)

	writer = pypdf.PdfWriter()
	label_page = writer.add_page(slm.pdf_io.first_page(label_reader))
	width, height = slm.pdf_io.page_size(label_page)
	if verbose:
		print(f"Label dimensions: {width:.1f}x{height:.1f}")

	placement = resolve_placement(label_reader, height, slip_metadata, options, verbose)
	layout = LayoutKind(sheet=slm.crop.classify_sheet(height), placement=placement)
	profile = slm.crop.profile_for_placement(placement)
	slm.crop.apply_crop_rotate(label_page, layout, profile)
	if verbose:
		print(f"Applied {profile.name} crop on a {layout.sheet.value} sheet")

	for page in slip_reader.pages:
		writer.add_page(page)

	metadata = slip_metadata
	if metadata is None:
		metadata = slm.identifiers.placeholder_metadata()
	return MergeResult(
		pdf_bytes=slm.pdf_io.save_document(writer),
		filename=build_filename(slip_metadata),
		metadata=metadata,
	)


#============================================
def extract_metadata(pdf_bytes: bytes, alphanumeric_ids: bool = False) -> ExtractedMetadata | None:
	"""
	Extract order metadata from a PDF buffer.
	"""
	text = slm.pdf_io.extract_text(pdf_bytes)
	return slm.identifiers.extract_metadata_from_text(text, alphanumeric_ids=alphanumeric_ids)


#============================================
def find_all_identifiers(pdf_bytes: bytes) -> list[str]:
	"""
	List every order id in a PDF buffer, in textual order.
	"""
	text = slm.pdf_io.extract_text(pdf_bytes)
	return slm.identifiers.find_identifiers_in_text(text)


#============================================
def looks_like_slip_marker(pdf_bytes: bytes) -> bool:
	text = slm.pdf_io.extract_text(pdf_bytes)
	return slm.identifiers.has_slip_marker(text)


#============================================
def extract_bulk_labels(pdf_bytes: bytes, verbose: bool = False) -> list[ExtractedHalf]:
	"""
	Split every sheet of a bulk label PDF into per-order halves.

	Args:
		pdf_bytes: Bulk label PDF.
		verbose: Print per-page reconciliation.

	Returns:
		ExtractedHalf records in page order, top before bottom. Empty when
		the document is recognized as a slip.
	"""
	reader = slm.pdf_io.load_document(pdf_bytes)
	if slm.identifiers.has_slip_marker(slm.pdf_io.document_text(reader)):
		if verbose:
			print("Document carries the slip marker, skipping label extraction")
		return []
	halves: list[ExtractedHalf] = []
	for index, page in enumerate(reader.pages):
		halves.extend(slm.reconcile.extract_halves(page, index, verbose))
	return halves


#============================================
def extract_bulk_slips(pdf_bytes: bytes, verbose: bool = False) -> list[SlipGroup]:
	reader = slm.pdf_io.load_document(pdf_bytes)
	return slm.slips.group_slips(reader, verbose)


#============================================
def merge_bulk(
	label_sheet_bytes: bytes,
	slip_sheet_bytes: bytes,
	verbose: bool = False,
) -> BatchResult:
	"""
	Merge a bulk label PDF with a bulk slip PDF, order by order.

	Slip groups and label halves are matched on order id. Unmatched groups,
	unmatched or duplicate halves and per-pair failures are reported as
	errors while the remaining pairs are still merged.

	Args:
		label_sheet_bytes: PDF of sheets holding one or two labels each.
		slip_sheet_bytes: PDF of slips for several orders.
		verbose: Print progress.

	Returns:
		BatchResult.
	"""
	halves = extract_bulk_labels(label_sheet_bytes, verbose)
	groups = extract_bulk_slips(slip_sheet_bytes, verbose)
	batch = BatchResult()

	halves_by_id: dict[str, ExtractedHalf] = {}
	for half in halves:
		halves_by_id.setdefault(half.order_id, half)

	matched_ids: set[str] = set()
	for group in groups:
		half = halves_by_id.get(group.order_id)
		if half is None:
			batch.errors.append(
				f"No matching shipping label found for Order ID {group.order_id} (from {group.original_name})"
			)
			continue
		matched_ids.add(group.order_id)
		options = MergeOptions(force_bulk=True, position=half.position)
		try:
			result = merge_one(half.pdf_bytes, group.pdf_bytes, options, verbose)
		except ITEM_ERRORS as error:
			batch.errors.append(f"Error processing {group.original_name}: {error}")
			continue
		batch.results.append(result)
		if verbose:
			print(f"Merged order {group.order_id} ({half.position.value} label)")

	for half in halves:
		where = f"page {half.page_index + 1} {half.position.value}"
		if halves_by_id[half.order_id] is not half:
			batch.errors.append(f"Duplicate shipping label for Order ID {half.order_id} ({where})")
		elif half.order_id not in matched_ids:
			batch.errors.append(f"No matching slip found for label Order ID {half.order_id} ({where})")
	return batch


#============================================
def is_label_name(name: str) -> bool:
	return LABEL_NAME_TOKEN in name.lower()


#============================================
def merge_file_pairs(
	files: dict[str, bytes],
	options: MergeOptions | None = None,
	verbose: bool = False,
) -> BatchResult:
	"""
	Pair named label and slip files by order id and merge each pair.

	Files whose name contains "label" are shipping labels, all others are
	slips. Each slip's order id is looked up in the label file names.

	Args:
		files: Mapping of file name to PDF bytes.
		options: Merge options applied to every pair.
		verbose: Print progress.

	Returns:
		BatchResult.
	"""
	if options is None:
		options = MergeOptions()
	label_names = [name for name in files if is_label_name(name)]
	slip_names = [name for name in files if not is_label_name(name)]
	batch = BatchResult()
	if verbose:
		print(
			f"Processing {len(files)} files: {len(label_names)} labels, {len(slip_names)} slips"
		)

	for slip_name in slip_names:
		try:
			metadata = extract_metadata(files[slip_name], options.alphanumeric_ids)
			if metadata is None:
				batch.errors.append(f"Could not find Order ID in file: {slip_name}")
				continue
			order_id = metadata.order_id
			label_name = next((name for name in label_names if order_id in name), None)
			if label_name is None:
				batch.errors.append(
					f"No matching shipping label found for Order ID {order_id} (from {slip_name})"
				)
				continue
			if verbose:
				print(f"Slip {slip_name} matches label {label_name}")
			batch.results.append(merge_one(files[label_name], files[slip_name], options, verbose))
		except ITEM_ERRORS as error:
			batch.errors.append(f"Error processing {slip_name}: {error}")
	return batch
