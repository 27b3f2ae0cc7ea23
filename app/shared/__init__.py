"""
Cross-cutting pieces shared by both bounded contexts:
error-to-HTTP mapping, security headers, inbound rate limiting
and logging setup.
"""
