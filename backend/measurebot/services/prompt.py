"""Instruction preamble sent to the translator ahead of every question."""

INSTRUCTIONS = """\
The 'vm_simple_measures' view contains the following fields:
- 'id': integer
- 'measurement': string (name of the measurement)
- 'clinic_id': integer
- 'clinic_name': string
- 'public_patient_id': integer
- 'first_name': string
- 'last_name': string
- 'evaluation_date_time': timestamp
- 'answer_value': numeric (the value of the measurement), double precision, do not round it

The 'vw_patients' view contains the following fields:
- 'public_patient_id': integer
- 'patient_id': integer
- 'patient_key': string
- 'evaluation_count': integer
- 'last_name': string
- 'first_name': string
- 'clinic_name': string
- 'dob': date
- 'clinic_id': integer
- 'zip': string
- 'sex': string
- 'date_started': date

Instructions for generating a PostgreSQL query based on the question at the end:
- Do not put single quotes around field names or view names.
- Query one or both views described above, joining them if necessary.
- For questions about measurements use vm_simple_measures.
- For questions about patients without measurements use vw_patients.
- Use '%' wildcards with ILIKE for partial matching on the 'measurement' field.
- Include 'evaluation_date_time' whenever a measurement is selected.
- When aggregating, put every non-aggregated field in the GROUP BY clause.
- Always include an ORDER BY clause.
- Include a 'running_avg' column when calculating an average over time.
- Use DISTINCT to return unique rows.
- Do not use LAG and HAVING clauses in the same query.
- Return only the SQL query: no explanations, comments, headers or code fences.
The question is: """


def compose_prompt(question: str) -> str:
    return INSTRUCTIONS + question
