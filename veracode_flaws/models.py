# -*- coding: utf-8 -*-

"""
Plain records decoded from the Veracode XML API.

Every value is kept as the string the service sent, so flags such as
affects_policy_compliance stay "true" / "false".
"""


class Application:
	def __init__(self,
		app_id=None,
		app_name=None,):

		self.app_id = app_id or ''
		self.app_name = app_name or ''

	def __repr__(self):
		return 'Application(app_id={0!r}, app_name={1!r})'.format(self.app_id, self.app_name)


class Build:
	def __init__(self,
		build_id=None,
		version=None,
		policy_updated_date=None,):

		self.build_id = build_id or ''
		self.version = version or ''
		self.policy_updated_date = policy_updated_date or ''

	def __repr__(self):
		return 'Build(build_id={0!r})'.format(self.build_id)


class CustomField:
	def __init__(self, name=None, value=None):
		self.name = name or ''
		self.value = value or ''

	def __repr__(self):
		return 'CustomField(name={0!r}, value={1!r})'.format(self.name, self.value)


class Flaw:
	def __init__(self,
		issueid=None,
		categoryname=None,
		cwename=None,
		cweid=None,
		remediation_status=None,
		mitigation_status=None,
		policy_name=None,
		affects_policy_compliance=None,
		date_first_occurrence=None,
		severity=None,
		exploit_level=None,
		module=None,
		sourcefile=None,
		line=None,
		url=None,
		description=None,):

		self.issueid = issueid or ''
		self.categoryname = categoryname or ''
		self.cwename = cwename or ''
		self.cweid = cweid or ''
		self.remediation_status = remediation_status or ''
		self.mitigation_status = mitigation_status or ''
		self.policy_name = policy_name or ''
		self.affects_policy_compliance = affects_policy_compliance or ''
		self.date_first_occurrence = date_first_occurrence or ''
		self.severity = severity or ''
		self.exploit_level = exploit_level or ''
		self.module = module or ''
		self.sourcefile = sourcefile or ''
		self.line = line or ''
		self.url = url or ''
		self.description = description or ''

	def __repr__(self):
		return 'Flaw(issueid={0!r}, module={1!r}, remediation_status={2!r})'.format(
			self.issueid, self.module, self.remediation_status)


class DetailedReport:
	def __init__(self,
		build_id=None,
		app_id=None,
		app_name=None,
		policy_name=None,
		static_submitted_date=None,
		dynamic_submitted_date=None,
		dynamic_target_urls=None,
		manual_submitted_date=None,
		custom_fields=None,
		flaws=None,):

		self.build_id = build_id or ''
		self.app_id = app_id or ''
		self.app_name = app_name or ''
		self.policy_name = policy_name or ''
		self.static_submitted_date = static_submitted_date or ''
		self.dynamic_submitted_date = dynamic_submitted_date or ''
		self.dynamic_target_urls = list(dynamic_target_urls or [])
		self.manual_submitted_date = manual_submitted_date or ''
		self.custom_fields = list(custom_fields or [])
		self.flaws = list(flaws or [])

	@property
	def dynamic_target_url(self):
		# First dynamic module drives the scan target column.
		if self.dynamic_target_urls:
			return self.dynamic_target_urls[0]
		return ''
