from django.contrib import admin
from .models import Course, Lesson, Quiz, QuizQuestion


class LessonInline(admin.TabularInline):
    model = Lesson
    extra = 0
    fields = ('title', 'order', 'duration', 'file_path')


class QuizQuestionInline(admin.TabularInline):
    model = QuizQuestion
    extra = 0


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'trainer', 'status', 'enrollment_limit', 'created_at')
    list_filter = ('status', 'category')
    search_fields = ('title', 'description')
    readonly_fields = ('approved_by', 'approved_at', 'created_at', 'updated_at')
    inlines = [LessonInline]


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'course', 'trainer', 'passing_score', 'is_active')
    list_filter = ('is_active',)
    inlines = [QuizQuestionInline]
