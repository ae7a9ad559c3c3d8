# -*- coding: utf-8 -*-

import pytest

from veracode_flaws.api import DetailedReportError
from veracode_flaws.config import Settings
from veracode_flaws.models import Application, Build, CustomField, DetailedReport, Flaw


class FakeAPI:
	"""Stands in for XMLAPI; reports maps build id to a DetailedReport or an exception."""

	def __init__(self, apps=None, builds=None, reports=None):
		self.apps = apps or []
		self.builds = builds or {}
		self.reports = reports or {}
		self.report_calls = []

	def getapplist(self):
		return self.apps

	def getbuildlist(self, app_id=None):
		return self.builds.get(app_id, [])

	def detailedreport(self, build=None):
		self.report_calls.append(build)
		report = self.reports.get(build)
		if report is None:
			raise DetailedReportError('No report available.')
		if isinstance(report, Exception):
			raise report
		return report


def make_flaw(**kwargs):
	values = {
		'issueid': '1',
		'categoryname': 'SQL Injection',
		'cwename': 'Improper Neutralization of Special Elements used in an SQL Command',
		'cweid': '89',
		'remediation_status': 'Open',
		'mitigation_status': 'none',
		'policy_name': 'Veracode Recommended High',
		'affects_policy_compliance': 'true',
		'date_first_occurrence': '2019-01-02 10:00:00 UTC',
		'severity': '4',
		'exploit_level': '1',
		'module': 'static_commands',
		'sourcefile': 'Login.java',
		'line': '42',
		'url': '',
		'description': 'Unsanitized input, reaches "query"',
	}
	values.update(kwargs)
	return Flaw(**values)


def make_report(flaws=None, custom_fields=None, **kwargs):
	if custom_fields is None:
		custom_fields = [CustomField(name='Custom 1', value='Value 1')]
	values = {
		'static_submitted_date': '2019-03-01 09:00:00 UTC',
		'dynamic_submitted_date': '2019-03-02 09:00:00 UTC',
		'manual_submitted_date': '2019-03-03 09:00:00 UTC',
		'dynamic_target_urls': ['https://target.example.com/'],
	}
	values.update(kwargs)
	return DetailedReport(flaws=flaws or [], custom_fields=custom_fields, **values)


@pytest.fixture
def output_file(tmp_path):
	return str(tmp_path / 'flaws.csv')


@pytest.fixture
def settings(output_file):
	return Settings(output_file_name=output_file)


@pytest.fixture
def app():
	return Application(app_id='100', app_name='Payments')


@pytest.fixture
def builds():
	return [Build(build_id=str(n)) for n in (11, 12, 13, 14)]
