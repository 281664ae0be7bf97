DEFAULT_INSTRUCTION = (
    "Summarize this meeting transcript into key points, decisions made, and action items."
)

CUSTOM_PROMPT_TITLE = "Custom Prompt"

# (title, instruction) pairs seeded into every new store
DEFAULT_PROMPTS = [
    ("Meeting Summary", DEFAULT_INSTRUCTION),
    (
        "Action Items Only",
        "Extract only the action items and tasks assigned from this meeting transcript.",
    ),
    ("Key Decisions", "Identify and summarize the key decisions made during this meeting."),
    (
        "Executive Summary",
        "Create a brief executive summary of this meeting suitable for leadership review.",
    ),
]

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert meeting summarizer. Create clear, actionable summaries "
    "from meeting transcripts."
)

SUMMARY_USER_PROMPT = """Please summarize the following meeting transcript \
according to these instructions: "{instruction}"

Transcript:
{transcript}"""

MEETING_SUMMARY_TEMPLATE = """## Meeting Summary

**Key Discussion Points:**
- Project timeline and milestones were reviewed
- Budget allocation for Q2 was discussed
- Team resource planning was addressed

**Decisions Made:**
- Approved the proposed timeline extension
- Allocated additional budget for development tools
- Agreed to hire two additional team members

**Action Items:**
- John to finalize budget proposal by Friday
- Sarah to schedule interviews for new positions
- Team to review updated project timeline by Monday

**Next Steps:**
- Follow-up meeting scheduled for next week
- Implementation to begin following resource allocation"""

ACTION_ITEMS_TEMPLATE = """## Action Items

1. **John Smith** - Finalize budget proposal
   - Due: Friday, March 22nd
   - Priority: High

2. **Sarah Johnson** - Schedule candidate interviews
   - Due: Next Tuesday
   - Priority: Medium

3. **Development Team** - Review updated timeline
   - Due: Monday, March 25th
   - Priority: High

4. **Marketing Team** - Prepare campaign materials
   - Due: End of month
   - Priority: Medium"""

KEY_DECISIONS_TEMPLATE = """## Key Decisions Made

**Budget Approval**
- Approved additional $50K for development tools and resources
- Rationale: Will improve team productivity and project delivery

**Timeline Extension**
- Extended project deadline by 3 weeks
- Reason: Account for additional feature requirements

**Team Expansion**
- Approved hiring of 2 additional developers
- Focus areas: Frontend development and QA testing

**Process Changes**
- Implemented weekly progress reviews
- Adopted new project management methodology"""

EXECUTIVE_SUMMARY_TEMPLATE = """## Executive Summary

**Meeting Overview**
This strategic planning meeting focused on Q2 project execution and resource allocation.

**Key Outcomes**
- Budget increase approved to support enhanced project scope
- Timeline adjusted to ensure quality delivery
- Team expansion authorized to meet growing demands

**Financial Impact**
- Additional investment: $50K for tools and resources
- Expected ROI: 25% improvement in delivery efficiency

**Next Actions**
Leadership team to reconvene next week to review implementation progress and \
address any emerging challenges."""

# Checked in order, first keyword found in the lowercased instruction wins
TEMPLATE_KEYWORDS = [
    ("action item", ACTION_ITEMS_TEMPLATE),
    ("decision", KEY_DECISIONS_TEMPLATE),
    ("executive", EXECUTIVE_SUMMARY_TEMPLATE),
]
