"""
Complaint triage service: LLM analysis of consumer complaint batches.
"""
