"""Legal boilerplate for each available document type.

Bracketed text marks where a value belongs. The registry decides which
bracketed tokens are filled from which form field; tokens without a slot
(e.g. ``[City, State]``) stay verbatim in every rendering.
"""

# =============================================================================
# COMMON DOCUMENTS
# =============================================================================

POLICE_COMPLAINT_TEMPLATE = """\
POLICE COMPLAINT

To,
The Station House Officer,
[Police Station Name]
[City, State]

Date: [Current Date]

Subject: Complaint regarding [Subject of Complaint]

Respected Sir/Madam,

I, [Your Name], resident of [Your Address], would like to report an incident that occurred on [Date of Incident] at [Location of Incident].

[Detailed description of the incident including what happened, who was involved, and any evidence or witnesses]

I request you to register an FIR regarding this matter and take appropriate action as per the law. I am ready to cooperate with the investigation and provide any additional information that may be required.

Yours faithfully,

[Your Name]
Contact: [Your Phone Number]
Email: [Your Email Address]
"""

LEGAL_NOTICE_TEMPLATE = """\
LEGAL NOTICE

Date: [Current Date]

To,
[Recipient Name]
[Recipient Address]

Subject: [Subject of the Notice]

Dear Sir/Madam,

Under instructions from and on behalf of my client, [Sender Name], residing at [Sender Address], I hereby serve you with the following legal notice:

[Detailed description of the issue, including relevant facts, dates, and circumstances]

In view of the above, my client hereby demands:

[Specific demands or actions required from the recipient]

You are hereby called upon to comply with the above demands within [number of days] days from the receipt of this notice, failing which my client will be constrained to initiate appropriate legal proceedings against you, civil and/or criminal, at your risk, cost, and consequences.

This notice is being issued without prejudice to any other rights and remedies available to my client under the law.

Yours sincerely,

[Advocate Name]
Advocate for [Sender Name]
"""

RTI_APPLICATION_TEMPLATE = """\
RIGHT TO INFORMATION APPLICATION
(Under Section 6(1) of the Right to Information Act, 2005)

Date: [Current Date]

To,
The Public Information Officer
[Name of the Public Authority]
[Address of the Public Authority]

Subject: Request for information under RTI Act, 2005

Sir/Madam,

I, [Applicant Name], resident of [Applicant Address], would like to seek the following information under the Right to Information Act, 2005:

[Clearly specify the information being sought]

The information pertains to the period: [Specify the time period for which information is sought]

I am hereby paying the application fee of Rs. 10/- by [mode of payment].

I belong to [BPL/APL] category. (If BPL, attach proof)

I assure that the information obtained will be used for personal purposes only.

Yours faithfully,

[Applicant Name]
Phone: [Phone Number]
"""

# Statements 3-5 are a single slot: the user's statements replace the whole
# numbered skeleton.
AFFIDAVIT_STATEMENTS_SKELETON = "3. [Statement 1]\n\n4. [Statement 2]\n\n5. [Statement 3]"

AFFIDAVIT_TEMPLATE = f"""\
AFFIDAVIT

I, [Deponent Name], son/daughter/wife of [Father's/Husband's Name], aged [Age] years, resident of [Address], do hereby solemnly affirm and declare as under:

1. That I am the deponent of this affidavit and am fully competent to swear the same.

2. That this affidavit is being submitted for the purpose of [Purpose of the Affidavit].

{AFFIDAVIT_STATEMENTS_SKELETON}

I solemnly affirm that the contents of this affidavit are true and correct to the best of my knowledge and belief, and nothing material has been concealed therefrom.

Verified at [Place] on this [Day] of [Month], [Year].

DEPONENT

VERIFICATION:
Verified at [Place] on this [Day] of [Month], [Year] that the contents of the above affidavit are true and correct to the best of my knowledge and belief, and nothing material has been concealed therefrom.

DEPONENT
"""
