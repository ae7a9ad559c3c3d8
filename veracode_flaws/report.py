# -*- coding: utf-8 -*-

import io
import csv
import logging

from veracode_flaws.filters import DYNAMIC_MODULE, MANUAL_MODULE

COLUMNS_BEFORE_CUSTOM_FIELD = ['app_name', 'app_id']
COLUMNS_AFTER_CUSTOM_FIELD = [
	'build_id',
	'unique_id',
	'issueid',
	'analysis_type',
	'category',
	'cwe_name',
	'cwe_id',
	'remediation_status',
	'mitigation_status',
	'policy_name',
	'affects_policy_compliance',
	'date_first_occurrence',
	'recent_scan_date',
	'severity',
	'exploit_level',
	'module',
	'source_file',
	'line',
	'scan_target_url',
	'flaw_url',
]


class MissingCustomFieldError(Exception):
	pass


def header_row(custom_field_name, include_description=False):
	headers = COLUMNS_BEFORE_CUSTOM_FIELD + [custom_field_name] + COLUMNS_AFTER_CUSTOM_FIELD
	if include_description:
		headers.append('description')
	return headers


def first_custom_field(app, selection):
	if not selection.custom_fields:
		raise MissingCustomFieldError('App {0} ({1}) has no custom fields in build {2}.'.format(
			app.app_id, app.app_name, selection.build_id))
	return selection.custom_fields[0]


def scan_details(report, flaw):
	"""Return (scan_type, scan_target_url, scan_submitted_date) for a flaw."""
	if flaw.module == DYNAMIC_MODULE:
		return 'dynamic', report.dynamic_target_url, report.dynamic_submitted_date
	elif flaw.module == MANUAL_MODULE:
		return 'manual', '', report.manual_submitted_date
	return 'static', '', report.static_submitted_date


def project_row(app, selection, flaw, include_description=False):
	scan_type, scan_target_url, scan_submitted_date = scan_details(selection.report, flaw)
	custom_field = first_custom_field(app, selection)

	entry = [
		app.app_name,
		app.app_id,
		custom_field.value,
		selection.build_id,
		'{0}-{1}'.format(app.app_id, flaw.issueid),
		flaw.issueid,
		scan_type,
		flaw.categoryname,
		flaw.cwename,
		flaw.cweid,
		flaw.remediation_status,
		flaw.mitigation_status,
		flaw.policy_name,
		flaw.affects_policy_compliance,
		flaw.date_first_occurrence,
		scan_submitted_date,
		flaw.severity,
		flaw.exploit_level,
		flaw.module,
		flaw.sourcefile,
		flaw.line,
		scan_target_url,
		flaw.url,
	]
	if include_description:
		entry.append(flaw.description)
	return entry


class FlawReportWriter:
	"""
	CSV sink for the whole run.

	The custom-field column is labelled after the first application that
	produces a row, so the header goes out together with the first row.
	"""

	def __init__(self,
		csvfile=None,
		include_description=False,
		fail_on_write_error=False,):

		self.logger = logging.getLogger('Report Writer')

		self.csvfile = csvfile
		self.include_description = include_description
		self.fail_on_write_error = fail_on_write_error
		self.header_written = False
		self.rows_written = 0

	def encode(self, rows):
		buffer = io.StringIO()
		filewriter = csv.writer(buffer, delimiter=',')
		filewriter.writerows(rows)
		return buffer.getvalue()

	def write(self, custom_field_name, row):
		rows = [row]
		if not self.header_written:
			self.logger.debug('Writing the CSV header.')
			rows.insert(0, header_row(custom_field_name, self.include_description))

		# Header and first row reach the file together or not at all.
		try:
			self.csvfile.write(self.encode(rows))
		except (csv.Error, OSError) as e:
			if self.fail_on_write_error:
				raise
			self.logger.error('Unable to write row {0}: {1}'.format(row[4] if len(row) > 4 else row, e))
			return False

		self.header_written = True
		self.rows_written += 1
		return True
