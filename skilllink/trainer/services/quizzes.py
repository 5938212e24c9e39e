"""
Quiz authoring. Updating the questions of a quiz replaces the whole set:
existing rows are deleted and the submitted list is recreated in order.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import PermissionDenied

from admin.models import Role
from trainer.models import Quiz, QuizQuestion
from trainer.policy import can_manage_quiz, require_role

logger = logging.getLogger(__name__)

QUIZ_FIELDS = ('title', 'description', 'time_limit', 'passing_score', 'is_active')


def _build_questions(quiz, questions):
    return [
        QuizQuestion(
            quiz=quiz,
            question=item['question'],
            options=list(item['options']),
            correct_answer=item['correct_answer'],
            points=item.get('points') or 1,
            order=item['order'] if item.get('order') is not None else position,
        )
        for position, item in enumerate(questions)
    ]


def replace_questions(quiz, questions):
    with transaction.atomic():
        quiz.questions.all().delete()
        QuizQuestion.objects.bulk_create(_build_questions(quiz, questions))


def create_quiz(actor, course, data, questions):
    require_role(actor, Role.TRAINER)
    if course.trainer_id != actor.id:
        raise PermissionDenied('Forbidden: You can only create quizzes for your own courses')

    with transaction.atomic():
        quiz = Quiz.objects.create(
            course=course,
            trainer_id=actor.id,
            **{field: data[field] for field in QUIZ_FIELDS if field in data}
        )
        QuizQuestion.objects.bulk_create(_build_questions(quiz, questions))

    logger.info(f"Quiz {quiz.id} created for course {course.id} with {len(questions)} questions")
    return quiz


def update_quiz(actor, quiz, data, questions=None):
    if not can_manage_quiz(actor, quiz):
        raise PermissionDenied('Forbidden: You can only update your own quizzes')

    with transaction.atomic():
        for field in QUIZ_FIELDS:
            if field in data:
                setattr(quiz, field, data[field])
        quiz.save()
        if questions is not None:
            replace_questions(quiz, questions)

    logger.info(f"Quiz {quiz.id} updated by {actor.role} {actor.id}")
    return quiz


def delete_quiz(actor, quiz):
    if not can_manage_quiz(actor, quiz):
        raise PermissionDenied('Forbidden: You can only delete your own quizzes')
    quiz_id = quiz.id
    quiz.delete()
    logger.info(f"Quiz {quiz_id} deleted by {actor.role} {actor.id}")
