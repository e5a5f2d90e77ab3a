"""
Registry of the MO-100 Word course materials: the syllabus and the eight weekly handouts.
"""
from datetime import date, timedelta

PROGRAM_NAME = "Microsoft Word (MO-100) Exam Preparation Program"
PROGRAM_WEEKS = 8


class Material:
    def __init__(self, slug, title, cover_title, header_label, pdf_topic, keywords,
                 week=None, subject="MO-100 Word Certification Preparation",
                 class_scoped_access=True):
        self.slug = slug
        self.title = title
        self.cover_title = cover_title
        self.header_label = header_label
        self.pdf_topic = pdf_topic
        self.keywords = keywords
        self.week = week
        self.subject = subject
        # The syllabus covers the whole program, so a class scope never narrows its access check
        self.class_scoped_access = class_scoped_access

    @property
    def content_template(self):
        return f"course_materials/word/content/{self.slug}.html"

    @property
    def is_syllabus(self):
        return self.week is None

    @property
    def short_label(self):
        return "Syllabus" if self.is_syllabus else f"Week {self.week} Handout"

    @property
    def previous(self):
        if self.week and self.week > 1:
            return WEEKS[self.week - 1]
        return None

    @property
    def next(self):
        if self.week and self.week < PROGRAM_WEEKS:
            return WEEKS[self.week + 1]
        return None

    def pdf_filename(self, on_date):
        return f"{self.pdf_topic}_{on_date.isoformat()}.pdf"

    def __repr__(self):
        return f"<Material {self.slug}>"


SYLLABUS = Material(
    slug="syllabus",
    title="MO-100 Microsoft Word Certification Program Syllabus",
    cover_title="Complete Course Syllabus",
    header_label="MO-100 Microsoft Word Certification Syllabus",
    pdf_topic="MO-100_Word_Certification_Syllabus",
    keywords="Microsoft Word, MO-100, Syllabus, Certification, Course Outline, Exam Preparation",
    subject="MO-100 Microsoft Word Certification Preparation",
    class_scoped_access=False,
)

WEEKS = {
    1: Material(
        slug="week1",
        week=1,
        title="Week 1: Introduction to Word & Document Management Basics",
        cover_title="Week 1 Handout: Introduction to Word & Document Management Basics",
        header_label="Week 1: Word Introduction & Basics",
        pdf_topic="Word_Week1_Introduction",
        keywords="Microsoft Word, MO-100, Introduction, Interface, Document Management, Navigation",
    ),
    2: Material(
        slug="week2",
        week=2,
        title="Week 2: Formatting Text, Paragraphs, and Sections",
        cover_title="Week 2 Handout: Formatting Text, Paragraphs, and Sections",
        header_label="Week 2: Formatting & Sections",
        pdf_topic="Word_Week2_Formatting",
        keywords="Microsoft Word, MO-100, Formatting, Styles, Sections, Columns",
    ),
    3: Material(
        slug="week3",
        week=3,
        title="Week 3: Working with Tables and Lists",
        cover_title="Week 3 Handout: Working with Tables and Lists",
        header_label="Week 3: Tables & Lists",
        pdf_topic="Word_Week3_Tables_Lists",
        keywords="Microsoft Word, MO-100, Tables, Lists, Formatting, Data Organization",
    ),
    4: Material(
        slug="week4",
        week=4,
        title="Week 4: Inserting and Formatting Graphic Elements",
        cover_title="Week 4 Handout: Inserting and Formatting Graphic Elements",
        header_label="Week 4: Graphic Elements",
        pdf_topic="Word_Week4_Graphic_Elements",
        keywords="Microsoft Word, MO-100, Graphic Elements, Images, Shapes, SmartArt",
    ),
    5: Material(
        slug="week5",
        week=5,
        title="Week 5: Creating and Managing References",
        cover_title="Week 5 Handout: Creating and Managing References",
        header_label="Week 5: References & Citations",
        pdf_topic="Word_Week5_References",
        keywords="Microsoft Word, MO-100, References, Citations, Table of Contents, Bibliography",
    ),
    6: Material(
        slug="week6",
        week=6,
        title="Week 6: Managing Document Collaboration",
        cover_title="Week 6 Handout: Managing Document Collaboration",
        header_label="Week 6: Document Collaboration",
        pdf_topic="Word_Week6_Collaboration",
        keywords="Microsoft Word, MO-100, Collaboration, Comments, Track Changes, Review",
    ),
    7: Material(
        slug="week7",
        week=7,
        title="Week 7: Document Inspection and Final Exam Preparation",
        cover_title="Week 7 Handout: Document Inspection and Final Exam Preparation",
        header_label="Week 7: Document Inspection & Exam Prep",
        pdf_topic="Word_Week7_Document_Inspection",
        keywords="Microsoft Word, MO-100, Document Inspection, Accessibility, Compatibility, Exam Preparation",
    ),
    8: Material(
        slug="week8",
        week=8,
        title="Week 8: Mock Exam & Final Review Session",
        cover_title="Week 8 Handout: Mock Exam & Final Review Session",
        header_label="Week 8: Mock Exam & Final Review",
        pdf_topic="Word_Week8_Mock_Exam_Final_Review",
        keywords="Microsoft Word, MO-100, Certification, Mock Exam, Final Review",
    ),
}


def get_week(week):
    """Return the weekly handout for ``week`` or None."""
    return WEEKS.get(week)


def all_materials():
    return [SYLLABUS] + [WEEKS[w] for w in sorted(WEEKS)]


def today():
    return date.today()


def program_end(start):
    """Last day of an 8-week program starting on ``start``."""
    return start + timedelta(weeks=PROGRAM_WEEKS)
