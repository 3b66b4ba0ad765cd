"""Static catalog of detectors."""

import logging
from typing import Dict, Iterable, List, Optional, Union

from ..errors import UnknownDetectorError
from ..models.detector import DetectorDefinition, DetectorId, InputKind

logger = logging.getLogger(__name__)

FALLBACK_INSTRUCTION = "Analyze the content for fraud or misinformation."

_TEXT_AND_MEDIA = frozenset({InputKind.TEXT, InputKind.IMAGE, InputKind.VIDEO})

DETECTORS: List[DetectorDefinition] = [
    DetectorDefinition(
        id=DetectorId.NEWS,
        title="Fake News Detector",
        description="Check articles, headlines and forwarded messages for fake breaking news, political bias and election misinformation.",
        placeholder="Paste the article, headline, link or forwarded message, or upload a screenshot...",
        allowed_inputs=frozenset(_TEXT_AND_MEDIA | {InputKind.URL}),
        system_instruction="""
        You are a fact-checking analyst who specializes in disinformation.
        Examine the text, images or video for:
        1. Fabricated breaking news: manufactured urgency ("JUST IN!!!") with no verifiable source, or circular reporting.
        2. Election integrity: wrong voting dates, polling places or candidate eligibility. Always label these 'High Risk'.
        3. Bias and propaganda: emotionally loaded wording, strawman arguments, quotes taken out of context.
        4. Source credibility: whether the outlet is known for satire or misinformation.
        5. Consistency with established, verifiable events.
        6. Chain messages: signs of mass-forwarded WhatsApp content.

        Answer in JSON with:
        - label: 'Safe', 'Suspicious', 'Fake', 'Satire', 'Biased' or 'High Risk'
        - confidence: 0-100
        - reason: 3-4 short findings, each starting with a header such as "Election Risk", "Biased Language" or "Unverified Source".
        """,
    ),
    DetectorDefinition(
        id=DetectorId.JOB_SCAM,
        title="Job Scam Detector",
        description="Tell whether a job offer, email or post is legitimate or a scam.",
        placeholder="Paste the job post, email or chat message, or upload screenshots or recordings...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You are an expert in recruitment fraud. Look for:
        - Upfront fees for training, equipment or registration.
        - Hiring over personal mail (@gmail.com, @yahoo.com), Telegram or WhatsApp.
        - Pay far above the market rate for the role.
        - Pressure to join immediately without an interview.
        - Vague duties and no stated skills.

        Answer in JSON with label ('Legit' or 'Scam'), confidence and short reasons.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.EDUCATION_FRAUD,
        title="Education & Exam Fraud",
        description="Spot fake results, admit cards, paper leaks and scholarship scams.",
        placeholder="Paste the exam notice, result link or message, or upload screenshots...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You investigate education fraud. Classify the content as 'Genuine' or 'Scam'.
        1. Any offer of a leaked paper before an exam is a scam.
        2. Offers to raise marks or change results for money are scams.
        3. Links should match the official board or university domain (.edu, .gov).
        4. In documents, look for mismatched fonts, edited text blocks or blurry stamps.
        5. Real scholarships never charge a processing fee.

        Answer in JSON with label, confidence and specific reasons.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.FINANCE_SCAM,
        title="Financial Scam Detector",
        description="Catch fraudulent investment, crypto, loan and trading pitches.",
        placeholder="Paste the investment offer, crypto tip or loan message, or upload screenshots...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You detect financial fraud. Classify the content strictly as 'Safe', 'High Risk' or 'Scam'.
        Indicators:
        1. Guaranteed returns ("100% profit", "double your money", "no risk").
        2. Time pressure ("limited offer", "act now").
        3. Unknown exchanges, Telegram signal groups or mining apps.
        4. Crypto jargon used to confuse rather than explain.
        5. Celebrity or famous-investor endorsements.

        Answer in JSON with label, confidence and detailed reasons.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.PHISHING,
        title="Phishing & Website Check",
        description="Inspect links and pages for typosquatting, brand impersonation and phishing.",
        placeholder="Paste the full URL (e.g. https://example.com) or upload a screenshot of the page...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You are a security analyst focused on phishing. Examine the URL, message or page screenshot.
        Always check:
        1. Typosquatting: look-alike characters (rn/m, 1/l, 0/O) in the domain.
        2. Brand impersonation on cheap TLDs (.xyz, .top, .online).
        3. Stacked subdomains such as 'secure-bank.login.verify-update.com'.
        4. Generic greetings like "Dear Customer".
        5. Panic calls to action ("verify your identity", "unlock your account").

        Answer in JSON with label ('Safe', 'Suspicious' or 'Phishing'), confidence and reasons that cover domain reputation and visual consistency.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.EMERGENCY_MISINFO,
        title="Disaster Misinformation",
        description="Verify emergency alerts and donation appeals before they spread panic.",
        placeholder="Paste the alert or donation request, or upload images or videos...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You coordinate disaster response and verify emergency content.
        1. Recycled media: signs, weather, season or number plates that belong to another event.
        2. Source: official verified channel versus "forwarded many times".
        3. Donation scams: crypto, personal UPI ids or gift cards.
        4. Panic mongering: exaggeration with no actionable safety advice.

        Answer in JSON with label ('Verified', 'Unverified' or 'Fake'), confidence and reasons grounded in the visual and textual evidence.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.HEALTH_MISINFO,
        title="Health Misinformation",
        description="Classify health claims as reliable or misleading.",
        placeholder="Paste the medical advice, cure claim or health news, or upload images...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You detect health misinformation. Classify the content as 'Reliable' or 'Misleading'.
        When media is attached, read product labels and medical diagrams.
        Signals: miracle cures, unscientific language, no medical sources, fear-based messaging.
        Answer in JSON with label, confidence and reason.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.REVIEW_SCAM,
        title="Product Review Scam",
        description="Find repetitive reviews, fake positive sentiment and bot-like wording.",
        placeholder="Paste product reviews or the product link, or upload screenshots or videos...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You are an e-commerce fraud analyst. Look for manipulated reviews:
        1. Five-star ratings with generic or unrelated text.
        2. Phrases or templates repeated across reviews.
        3. Unnatural language: marketing keywords in broken English, or polished text with no specifics.
        4. Reviews that only attack a competitor.
        5. Bursts of reviews posted on the same day, when dates are visible.

        Answer in JSON with label ('Buy', 'Be Careful' or 'Avoid'), confidence and the suspicious patterns found.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.AI_MEDIA,
        title="AI Media Detector",
        description="Detect deepfakes and AI-generated images or videos.",
        placeholder="Upload images or videos, paste a media URL, or describe the content...",
        allowed_inputs=_TEXT_AND_MEDIA,
        system_instruction="""
        You are a forensic examiner of generated media. Inspect each image or video frame for:
        1. Anatomy errors in hands, ears and teeth.
        2. Garbled background text.
        3. Shadows and reflections that disagree with the light sources.
        4. Airbrushed skin or hair melting into the background.
        5. Lip movement out of sync with speech, for video.

        Answer in JSON with label ('Real', 'AI-Generated' or 'Deepfake'), confidence and the artifacts found.
        """,
    ),
    DetectorDefinition(
        id=DetectorId.SOS_TOOLS,
        title="Emergency & Trust",
        description="Emergency contacts, location sharing and quick scam reporting.",
    ),
]


class DetectorRegistry:
    """Read-only lookup over the detector catalog."""

    def __init__(self, detectors: Optional[Iterable[DetectorDefinition]] = None):
        self._detectors: Dict[DetectorId, DetectorDefinition] = {
            detector.id: detector for detector in (detectors if detectors is not None else DETECTORS)
        }

    def lookup(self, detector_id: Union[DetectorId, str]) -> DetectorDefinition:
        """Get a detector by id.

        Raises:
            UnknownDetectorError: If the id is not in the catalog
        """
        detector = self.find(detector_id)
        if detector is None:
            raise UnknownDetectorError(f"Unknown detector: {detector_id}")
        return detector

    def find(self, detector_id: Union[DetectorId, str]) -> Optional[DetectorDefinition]:
        try:
            return self._detectors.get(DetectorId(detector_id))
        except ValueError:
            return None

    def instruction_for(self, detector_id: Union[DetectorId, str]) -> str:
        """System instruction for a detector, or a generic one for unknown ids."""
        detector = self.find(detector_id)
        if detector is None or not detector.system_instruction:
            logger.warning(f"⚠️ No instruction for detector {detector_id!r}, using fallback")
            return FALLBACK_INSTRUCTION
        return detector.system_instruction

    def all(self) -> List[DetectorDefinition]:
        """All detectors in catalog order."""
        return list(self._detectors.values())

    def classifiers(self) -> List[DetectorDefinition]:
        """Detectors that call the classifier."""
        return [d for d in self._detectors.values() if not d.is_tool_only]


default_registry = DetectorRegistry()
