"""DIR Payroll package.

Prevailing-wage timesheets organised by feature modules (tickets, payroll,
employee periods, DIR XML, CSV import) with a thin Flask controller layer and
service/repository layers underneath.
"""
