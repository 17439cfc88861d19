from formapi.models.form import FieldOption, FormConfig, FormFieldConfig, Layout, ValidationRules

EMAIL_PATTERN = r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$"


def name_rule(value):
    if value and "!" in value:
        return "Name cannot contain special characters."
    return None


def email_rule(value):
    if value == "test@example.com":
        return "This email is not allowed."
    return None


def age_rule(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool) and (value < 1 or value > 120):
        return "Age must be between 1 and 120."
    return None


contact_form = FormConfig(
    fields=[
        FormFieldConfig(
            id="name",
            type="text",
            label="Name",
            validation_rules=ValidationRules(type="string", required=True, min_length=2, custom=name_rule),
            info="Enter your full name",
        ),
        FormFieldConfig(
            id="email",
            type="text",
            label="Email",
            validation_rules=ValidationRules(
                type="string", required=True, min_length=2, pattern=EMAIL_PATTERN, custom=email_rule
            ),
            info="We'll never share your email",
        ),
        FormFieldConfig(
            id="message",
            type="textarea",
            label="Message",
            validation_rules=ValidationRules(type="string", required=True, min_length=2, max_length=500),
        ),
        FormFieldConfig(
            id="category",
            type="select",
            label="Category",
            options=[
                FieldOption(label="Option 1", value="option1"),
                FieldOption(label="Option 2", value="option2"),
                FieldOption(label="Option 3", value="option3"),
            ],
            validation_rules=ValidationRules(type="string", required=True, min_length=2),
        ),
        FormFieldConfig(
            id="subscribe",
            type="checkbox",
            label="Subscribe to newsletter",
            validation_rules=ValidationRules(type="boolean"),
        ),
        FormFieldConfig(
            id="preferredContact",
            type="radio",
            label="Preferred contact method",
            options=[
                FieldOption(label="Email", value="email"),
                FieldOption(label="Phone", value="phone"),
                FieldOption(label="Post", value="post"),
            ],
            validation_rules=ValidationRules(type="string", required=True, min_length=2),
        ),
        FormFieldConfig(
            id="birthdate",
            type="date",
            label="Birth Date",
            validation_rules=ValidationRules(type="string", required=True, min_length=2),
        ),
        FormFieldConfig(
            id="avatar",
            type="image",
            label="Profile Picture",
            validation_rules=ValidationRules(type="object"),
        ),
        FormFieldConfig(
            id="age",
            type="number",
            label="Age",
            validation_rules=ValidationRules(type="integer", required=True, custom=age_rule),
            info="Enter your age",
        ),
    ],
    layout=Layout(type="horizontal"),
)
