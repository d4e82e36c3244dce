# 📄 File: authhub/shared/infrastructure/email/__init__.py
# 🧭 Purpose (Layman Explanation):
# Sends the service's emails, or just writes them to the log when no mail server is configured.
# 🧪 Purpose (Technical Summary):
# EmailService implementations (SMTP and logging) and the template renderer.
# 🔗 Dependencies:
# smtplib, email.mime
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies, notification operations (through EmailService)
