"""Default configuration seeded into empty collections at startup."""


def _options(*pairs):
    return [{"value": value, "label": label} for value, label in pairs]


GENDER_OPTIONS = _options(
    ("masculino", "Masculino"),
    ("feminino", "Feminino"),
    ("outro", "Outro"),
    ("nao_informar", "Prefiro não informar"),
)

STATE_OPTIONS = _options(
    ("AC", "Acre"), ("AL", "Alagoas"), ("AP", "Amapá"), ("AM", "Amazonas"),
    ("BA", "Bahia"), ("CE", "Ceará"), ("DF", "Distrito Federal"),
    ("ES", "Espírito Santo"), ("GO", "Goiás"), ("MA", "Maranhão"),
    ("MT", "Mato Grosso"), ("MS", "Mato Grosso do Sul"), ("MG", "Minas Gerais"),
    ("PA", "Pará"), ("PB", "Paraíba"), ("PR", "Paraná"), ("PE", "Pernambuco"),
    ("PI", "Piauí"), ("RJ", "Rio de Janeiro"), ("RN", "Rio Grande do Norte"),
    ("RS", "Rio Grande do Sul"), ("RO", "Rondônia"), ("RR", "Roraima"),
    ("SC", "Santa Catarina"), ("SP", "São Paulo"), ("SE", "Sergipe"),
    ("TO", "Tocantins"),
)

COURSE_OPTIONS = _options(
    ("administracao", "Administração"),
    ("engenharia", "Engenharia"),
    ("medicina", "Medicina"),
    ("direito", "Direito"),
    ("computacao", "Ciência da Computação"),
)

SHIFT_OPTIONS = _options(("manha", "Manhã"), ("tarde", "Tarde"), ("noite", "Noite"))

MODALITY_OPTIONS = _options(
    ("presencial", "Presencial"),
    ("semipresencial", "Semipresencial"),
    ("ead", "EAD"),
)


def _field(name, label, type_, order, section, required=True, options=None):
    return {
        "name": name,
        "label": label,
        "type": type_,
        "required": required,
        "order": order,
        "section": section,
        "active": True,
        "options": options,
    }


DEFAULT_FORM_FIELDS = [
    _field("fullName", "Nome Completo", "text", 1, "personal"),
    _field("cpf", "CPF", "text", 2, "personal"),
    _field("rg", "RG", "text", 3, "personal"),
    _field("birthDate", "Data de Nascimento", "date", 4, "personal"),
    _field("gender", "Gênero", "select", 5, "personal", options=GENDER_OPTIONS),
    _field("address", "Endereço", "text", 6, "personal"),
    _field("city", "Cidade", "text", 7, "personal"),
    _field("state", "Estado", "select", 8, "personal", options=STATE_OPTIONS),
    _field("zipCode", "CEP", "text", 9, "personal"),
    _field("email", "Email", "email", 1, "contact"),
    _field("phone", "Telefone Celular", "tel", 2, "contact"),
    _field("whatsapp", "WhatsApp", "tel", 3, "contact", required=False),
    _field("emergencyContact", "Nome do Contato de Emergência", "text", 4, "contact", required=False),
    _field("emergencyPhone", "Telefone de Emergência", "tel", 5, "contact", required=False),
    _field("course", "Curso Desejado", "select", 1, "course", options=COURSE_OPTIONS),
    _field("shift", "Turno", "radio", 2, "course", options=SHIFT_OPTIONS),
    _field("modality", "Modalidade", "radio", 3, "course", options=MODALITY_OPTIONS),
    _field("additionalInfo", "Informações Adicionais", "textarea", 4, "course", required=False),
]

DEFAULT_DOCUMENT_REQUIREMENTS = [
    {"name": "RG (frente e verso)", "description": "Documento de identidade com foto",
     "required": True, "active": True, "order": 1},
    {"name": "CPF", "description": "Cadastro de Pessoa Física",
     "required": True, "active": True, "order": 2},
    {"name": "Comprovante de Residência",
     "description": "Conta de água, luz ou telefone (últimos 3 meses)",
     "required": True, "active": True, "order": 3},
    {"name": "Certificado de Conclusão do Ensino Médio",
     "description": "Documento oficial que comprove a conclusão do ensino médio",
     "required": True, "active": True, "order": 4},
    {"name": "Foto 3x4 recente", "description": "Foto colorida com fundo branco",
     "required": True, "active": True, "order": 5},
]

DEFAULT_COURSES = [
    {"name": "Administração", "code": "ADM",
     "description": "Curso de Administração com ênfase em gestão de negócios e empreendedorismo",
     "duration": 48, "coordinator": "Dra. Ana Silva", "price": 799.90, "active": True},
    {"name": "Engenharia Civil", "code": "ENG-CIV",
     "description": "Engenharia Civil com foco em construção sustentável e projetos urbanos",
     "duration": 60, "coordinator": "Dr. Carlos Oliveira", "price": 1299.90, "active": True},
    {"name": "Direito", "code": "DIR",
     "description": "Curso de Direito com ênfase em Direito Digital e novas tecnologias",
     "duration": 60, "coordinator": "Dra. Patrícia Mendes", "price": 1199.90, "active": True},
    {"name": "Ciência da Computação", "code": "CC",
     "description": "Ciência da Computação com foco em desenvolvimento de software e IA",
     "duration": 48, "coordinator": "Dr. Bruno Costa", "price": 999.90, "active": True},
    {"name": "Medicina", "code": "MED",
     "description": "Curso de Medicina com ênfase em saúde pública e tecnologias médicas",
     "duration": 72, "coordinator": "Dra. Márcia Santos", "price": 5999.90, "active": True},
]

DEFAULT_COURSE_SHIFTS = [
    {"name": "Manhã", "start_time": "08:00", "end_time": "12:00", "weekdays": "seg,ter,qua,qui,sex"},
    {"name": "Tarde", "start_time": "13:30", "end_time": "17:30", "weekdays": "seg,ter,qua,qui,sex"},
    {"name": "Noite", "start_time": "19:00", "end_time": "22:30", "weekdays": "seg,ter,qua,qui,sex"},
]

DEFAULT_COURSE_MODALITIES = [
    {"name": "Presencial", "description": "Aulas totalmente presenciais"},
    {"name": "Semipresencial", "description": "Aulas presenciais e online"},
    {"name": "EAD", "description": "Ensino à distância com encontros online"},
]
