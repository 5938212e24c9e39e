"""
Certificate issuance

A certificate is only ever created for a worker whose assessment on the
course passed. The PDF is rendered with reportlab and stored through
default_storage before the row is inserted; if anything fails on the way
the stored file is removed again and no row exists afterwards. Issuing
twice returns the first certificate.
"""
import io
import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction
from django.utils import timezone
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas
from rest_framework.exceptions import NotFound, PermissionDenied

from admin.models import Role, UserProfile
from skilllink.exceptions import AssessmentNotPassed, GenerationError
from trainer.models import Course
from trainer.policy import require_role
from worker.models import Assessment, Certificate

logger = logging.getLogger(__name__)

# leaves room for the suffix storage adds on a name clash
MAX_FILE_NAME_BYTES = 200


def certificate_file_name(worker, course):
    """
    certificates/Jane_Doe_Safety_Basics.pdf

    Names too long for the filesystem fall back to the worker and course ids.
    """
    def clean(value):
        return value.strip().replace(' ', '_').replace('/', '-').replace('\\', '-')
    file_name = f"{clean(worker.name)}_{clean(course.title)}.pdf"
    if len(file_name.encode('utf-8')) > MAX_FILE_NAME_BYTES:
        file_name = f"{worker.id}_{course.id}.pdf"
    return f"certificates/{file_name}"


def render_certificate_pdf(worker, course, issued_at):
    """Draw a one page landscape certificate and return the PDF bytes."""
    buffer = io.BytesIO()
    width, height = landscape(A4)
    pdf_canvas = canvas.Canvas(buffer, pagesize=(width, height))
    pdf_canvas.setTitle(f"Certificate of Completion - {course.title}")

    # Border
    pdf_canvas.setStrokeColorRGB(0.2, 0.3, 0.5)
    pdf_canvas.setLineWidth(4)
    pdf_canvas.rect(30, 30, width - 60, height - 60)

    pdf_canvas.setFillColorRGB(0.1, 0.1, 0.1)
    pdf_canvas.setFont("Helvetica-Bold", 28)
    pdf_canvas.drawCentredString(width / 2, height - 140, "Certificate of Completion")

    pdf_canvas.setFont("Helvetica", 18)
    pdf_canvas.drawCentredString(width / 2, height - 200, "This certifies that")

    pdf_canvas.setFont("Helvetica-Bold", 24)
    pdf_canvas.drawCentredString(width / 2, height - 245, worker.name)

    pdf_canvas.setFont("Helvetica", 18)
    pdf_canvas.drawCentredString(width / 2, height - 290, "has successfully completed the course")

    pdf_canvas.setFont("Helvetica-Bold", 20)
    pdf_canvas.drawCentredString(width / 2, height - 330, course.title)

    pdf_canvas.setFont("Helvetica", 14)
    pdf_canvas.drawCentredString(width / 2, 90, f"Issued on {issued_at.strftime('%B %d, %Y')}")

    pdf_canvas.showPage()
    pdf_canvas.save()
    return buffer.getvalue()


def _discard(stored_name):
    if not stored_name:
        return
    try:
        default_storage.delete(stored_name)
    except OSError as e:
        logger.warning(f"Could not remove certificate file {stored_name}: {e}")


def _ensure_passed(worker, course):
    assessment = Assessment.objects.filter(worker=worker, course=course).first()
    if assessment is None or assessment.score < settings.ASSESSMENT_PASSING_SCORE:
        raise AssessmentNotPassed()


def _issue(worker, course):
    """Return ``(certificate, created)``; the row is only written after the PDF is stored."""
    existing = Certificate.objects.filter(worker=worker, course=course).first()
    if existing is not None:
        return existing, False

    issued_at = timezone.now()
    stored_name = None
    try:
        pdf_bytes = render_certificate_pdf(worker, course, issued_at)
        stored_name = default_storage.save(
            certificate_file_name(worker, course),
            ContentFile(pdf_bytes),
            max_length=Certificate._meta.get_field('certificate_path').max_length,
        )
        with transaction.atomic():
            certificate = Certificate.objects.create(
                worker=worker,
                course=course,
                certificate_path=stored_name,
                issued_at=issued_at,
            )
    except IntegrityError:
        # another request issued the same certificate first
        _discard(stored_name)
        return Certificate.objects.get(worker=worker, course=course), False
    except Exception as e:
        logger.exception(f"Certificate generation failed for worker {worker.id} on course {course.id}: {e}")
        _discard(stored_name)
        raise GenerationError()

    logger.info(f"Certificate {certificate.id} issued to worker {worker.id} for course {course.id}")
    return certificate, True


def _get_course(course_id):
    try:
        return Course.objects.get(pk=course_id)
    except (Course.DoesNotExist, DjangoValidationError):
        raise NotFound('Course not found')


def issue_certificate(actor, worker_id, course_id):
    """Admins and trainers issue a certificate to a worker who passed."""
    if actor.role == Role.WORKER:
        raise PermissionDenied('Forbidden: admins and trainers only')
    require_role(actor, Role.ADMIN, Role.TRAINER)

    try:
        worker = UserProfile.objects.get(pk=worker_id, role=Role.WORKER)
    except (UserProfile.DoesNotExist, DjangoValidationError):
        raise NotFound('Worker not found')
    course = _get_course(course_id)

    _ensure_passed(worker, course)
    return _issue(worker, course)


def request_certificate(actor, course_id):
    """A worker asks for their own certificate."""
    require_role(actor, Role.WORKER)
    worker = UserProfile.objects.get(pk=actor.id)
    course = _get_course(course_id)

    _ensure_passed(worker, course)
    return _issue(worker, course)
