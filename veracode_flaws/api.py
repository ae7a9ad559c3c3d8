# -*- coding: utf-8 -*-

import base64
import logging
import requests
import xmltodict
from xml.parsers.expat import ExpatError
from veracode_api_signing.plugin_requests import RequestsAuthPluginVeracodeHMAC
from veracode_api_signing.exceptions import VeracodeCredentialsError

from veracode_flaws import __version__
from veracode_flaws.config import ConfigError, Credentials
from veracode_flaws.models import Application, Build, CustomField, DetailedReport, Flaw

TIMEOUT = (5, 90)

# Elements that may appear once or many times; always decode them as lists.
LIST_ELEMENTS = (
	'app',
	'build',
	'severity',
	'category',
	'cwe',
	'flaw',
	'module',
	'customfield',
)

FLAW_GROUPS = ('staticflaws', 'dynamicflaws', 'manualflaws')


class VeracodeAPIError(Exception):
	pass


class DetailedReportError(VeracodeAPIError):
	"""The build has no usable detailed report (pending, aborted, unreachable)."""


class XMLAPI:
	def __init__(self,
		credentials=None,
		timeout=TIMEOUT,
		session=None,):

		self.logger = logging.getLogger('API Veracode XML')

		self.credentials = credentials or Credentials()
		self.baseurl = self.credentials.api_base
		if not self.baseurl.endswith('/'):
			self.baseurl += '/'
		self.timeout = timeout
		self.session = session or requests.session()

		if not self.credentials.uses_basic_auth:
			self.logger.debug('Signing requests with Veracode HMAC.')
			if self.credentials.uses_hmac_keys:
				self.session.auth = RequestsAuthPluginVeracodeHMAC(
					api_key_id=self.credentials.api_key_id,
					api_key_secret=self.credentials.api_key_secret)
			else:
				self.session.auth = RequestsAuthPluginVeracodeHMAC()

	@property
	def headers(self):
		header = {
			'User-Agent': 'veracode-flaws/{0}'.format(__version__),
			'Accept': 'application/xml;q=0.9,*/*;q=0.8',
		}

		if self.credentials.uses_basic_auth:
			header['Authorization'] = "Basic {}".format(self.stringToBase64(
				user=self.credentials.user,
				passwd=self.credentials.passwd).decode('UTF-8'))

		return header

	def stringToBase64(self, user=None, passwd=None):
		self.logger.debug('Converting username and password to Base64.')
		userpass = "{0}:{1}".format(user, passwd)
		return base64.b64encode(userpass.encode('utf-8'))

	def call(self, endpoint, data=None):
		url = self.baseurl + endpoint
		self.logger.debug('POST {0} {1}'.format(url, data or ''))

		try:
			request = self.session.post(url, headers=self.headers, data=data, timeout=self.timeout)
		except VeracodeCredentialsError as e:
			raise ConfigError('No Veracode credentials available: {0}'.format(e))
		except requests.RequestException as e:
			raise VeracodeAPIError('{0} failed: {1}'.format(endpoint, e))

		if request.status_code != 200:
			raise VeracodeAPIError('{0} returned HTTP {1}. Please check manually using Curl, '
				'or make sure veracode API service is not down.'.format(endpoint, request.status_code))

		try:
			document = xmltodict.parse(request.content, force_list=LIST_ELEMENTS)
		except ExpatError as e:
			raise VeracodeAPIError('{0} returned a response that is not XML: {1}'.format(endpoint, e))

		if 'error' in document:
			raise VeracodeAPIError('{0}: {1}'.format(endpoint, document['error']))

		return document

	def getapplist(self):
		self.logger.info('Getting Apps Available on Veracode.')
		document = self.call('getapplist.do')
		return parse_app_list(document)

	def getbuildlist(self, app_id=None):
		self.logger.debug('Getting builds for app {0}.'.format(app_id))
		document = self.call('getbuildlist.do', data={'app_id': app_id})
		return parse_build_list(document)

	def detailedreport(self, build=None):
		self.logger.debug('Getting detailed report for build {0}.'.format(build))
		try:
			document = self.call('detailedreport.do', data={'build_id': build})
			return parse_detailed_report(document)
		except VeracodeAPIError as e:
			raise DetailedReportError(str(e))


def section(parent, name):
	# Attribute-less empty elements decode to None.
	if not parent:
		return {}
	return parent.get(name) or {}


def parse_app_list(document):
	applist = section(document, 'applist')
	apps = []
	for app in applist.get('app', []):
		if not app:
			continue
		apps.append(Application(
			app_id=app.get('@app_id'),
			app_name=app.get('@app_name'),
		))
	return apps


def parse_build_list(document):
	buildlist = section(document, 'buildlist')
	builds = []
	for build in buildlist.get('build', []):
		if not build:
			continue
		builds.append(Build(
			build_id=build.get('@build_id'),
			version=build.get('@version'),
			policy_updated_date=build.get('@policy_updated_date'),
		))
	return builds


def parse_detailed_report(document):
	if 'detailedreport' not in document:
		raise DetailedReportError('Response is not a detailed report.')
	report = section(document, 'detailedreport')
	policy_name = report.get('@policy_name')

	static_analysis = section(report, 'static-analysis')
	dynamic_analysis = section(report, 'dynamic-analysis')
	manual_analysis = section(report, 'manual-analysis')

	target_urls = []
	for module in section(dynamic_analysis, 'modules').get('module', []):
		if module and module.get('@target_url') is not None:
			target_urls.append(module.get('@target_url'))

	custom_fields = []
	for field in section(report, 'customfields').get('customfield', []):
		if not field:
			continue
		custom_fields.append(CustomField(name=field.get('@name'), value=field.get('@value')))

	return DetailedReport(
		build_id=report.get('@build_id'),
		app_id=report.get('@app_id'),
		app_name=report.get('@app_name'),
		policy_name=policy_name,
		static_submitted_date=static_analysis.get('@submitted_date'),
		dynamic_submitted_date=dynamic_analysis.get('@submitted_date'),
		dynamic_target_urls=target_urls,
		manual_submitted_date=manual_analysis.get('@submitted_date'),
		custom_fields=custom_fields,
		flaws=list(parse_flaws(report, policy_name=policy_name)),
	)


def parse_flaws(report, policy_name=None):
	for severity in report.get('severity', []):
		if not severity:
			continue
		for category in severity.get('category', []):
			if not category:
				continue
			for cwe in category.get('cwe', []):
				if not cwe:
					continue
				for group in FLAW_GROUPS:
					for flaw in section(cwe, group).get('flaw', []):
						if not flaw:
							continue
						yield Flaw(
							issueid=flaw.get('@issueid'),
							categoryname=flaw.get('@categoryname') or category.get('@categoryname'),
							cwename=cwe.get('@cwename'),
							cweid=flaw.get('@cweid') or cwe.get('@cweid'),
							remediation_status=flaw.get('@remediation_status'),
							mitigation_status=flaw.get('@mitigation_status'),
							policy_name=policy_name,
							affects_policy_compliance=flaw.get('@affects_policy_compliance'),
							date_first_occurrence=flaw.get('@date_first_occurrence'),
							severity=flaw.get('@severity') or severity.get('@level'),
							exploit_level=flaw.get('@exploitLevel'),
							module=flaw.get('@module'),
							sourcefile=flaw.get('@sourcefile'),
							line=flaw.get('@line'),
							url=flaw.get('@url'),
							description=flaw.get('@description'),
						)
