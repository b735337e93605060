"""
Reference vocabularies for profile analysis.

- NAF_SECTOR_MAP: two-digit NAF (French activity code) prefix -> sector label
- SECTOR_INDICATOR_KEYWORDS: words signalling a subsidy targets a sector
- SECTOR_EXCLUSIONS: words in a subsidy title that rule it out for a sector
- LEGAL_FORM_TO_ENTITY: legal form -> entity types used in eligibility lists
"""

from typing import Dict, List

NAF_SECTOR_MAP: Dict[str, str] = {
    # Agriculture, forestry, fishing
    '01': 'Agriculture', '02': 'Sylviculture', '03': 'Pêche',
    # Extraction
    '05': 'Mines', '06': 'Énergie', '07': 'Mines', '08': 'Carrières', '09': 'Énergie',
    # Manufacturing
    '10': 'Agroalimentaire', '11': 'Agroalimentaire', '12': 'Industrie',
    '13': 'Textile', '14': 'Textile', '15': 'Cuir', '16': 'Bois', '17': 'Papier',
    '18': 'Imprimerie', '19': 'Énergie', '20': 'Chimie', '21': 'Pharmacie',
    '22': 'Plasturgie', '23': 'Matériaux', '24': 'Métallurgie', '25': 'Métallurgie',
    '26': 'Électronique', '27': 'Électronique', '28': 'Mécanique', '29': 'Automobile',
    '30': 'Aéronautique', '31': 'Ameublement', '32': 'Industrie', '33': 'Industrie',
    # Energy, water, waste
    '35': 'Énergie',
    '36': 'Environnement', '37': 'Environnement', '38': 'Environnement', '39': 'Environnement',
    # Construction
    '41': 'BTP', '42': 'BTP', '43': 'BTP',
    # Trade
    '45': 'Commerce', '46': 'Commerce', '47': 'Commerce',
    # Transport and storage
    '49': 'Transport', '50': 'Transport', '51': 'Transport', '52': 'Logistique', '53': 'Logistique',
    # Accommodation and food
    '55': 'Tourisme', '56': 'Restauration',
    # Information and communication
    '58': 'Édition', '59': 'Audiovisuel', '60': 'Audiovisuel', '61': 'Télécommunications',
    '62': 'Numérique', '63': 'Numérique',
    # Finance and real estate
    '64': 'Finance', '65': 'Assurance', '66': 'Finance', '68': 'Immobilier',
    # Professional services
    '69': 'Services', '70': 'Conseil', '71': 'Ingénierie', '72': 'R&D',
    '73': 'Communication', '74': 'Design', '75': 'Santé animale',
    # Administrative services
    '77': 'Services', '78': 'RH', '79': 'Tourisme', '80': 'Sécurité', '81': 'Services', '82': 'Services',
    # Public, education, health
    '84': 'Public', '85': 'Formation', '86': 'Santé', '87': 'Social', '88': 'Social',
    # Arts and leisure
    '90': 'Culture', '91': 'Culture', '92': 'Jeux', '93': 'Sport',
    # Other services
    '94': 'Associatif', '95': 'Services', '96': 'Services',
}

# Matched against subsidy titles only; a hit is a hard filter
SECTOR_EXCLUSIONS: Dict[str, List[str]] = {
    'Agriculture': ['musique', 'musical', 'cinéma', 'audiovisuel', 'film', 'spectacle', 'théâtre', 'danse', 'jeux vidéo'],
    'Sylviculture': ['musique', 'cinéma', 'audiovisuel', 'spectacle', 'théâtre'],
    'Pêche': ['musique', 'cinéma', 'audiovisuel', 'spectacle', 'théâtre', 'agricole terrestre'],
    'Industrie': ['musique', 'musical', 'spectacle', 'théâtre', 'danse', 'artistique'],
    'Agroalimentaire': ['musique', 'cinéma', 'spectacle', 'numérique', 'logiciel'],
    'Textile': ['musique', 'cinéma', 'agricole', 'informatique'],
    'Bois': ['musique', 'cinéma', 'spectacle', 'numérique'],
    'Chimie': ['musique', 'cinéma', 'spectacle', 'artistique', 'agricole'],
    'Pharmacie': ['musique', 'cinéma', 'spectacle', 'agricole', 'bâtiment'],
    'Plasturgie': ['musique', 'cinéma', 'spectacle', 'agricole'],
    'Métallurgie': ['musique', 'cinéma', 'spectacle', 'agricole', 'artistique'],
    'Électronique': ['musique', 'spectacle', 'théâtre', 'agricole', 'élevage'],
    'Mécanique': ['musique', 'cinéma', 'spectacle', 'artistique'],
    'Automobile': ['musique', 'cinéma', 'spectacle', 'agricole', 'artistique'],
    'Aéronautique': ['musique', 'cinéma', 'spectacle', 'agricole', 'artistique'],
    'BTP': ['musique', 'musical', 'cinéma', 'film', 'spectacle', 'artistique', 'agricole'],
    'Matériaux': ['musique', 'cinéma', 'spectacle', 'artistique'],
    'Commerce': ['musique', 'musical', 'cinéma', 'film', 'spectacle'],
    'Transport': ['musique', 'cinéma', 'spectacle', 'agricole'],
    'Logistique': ['musique', 'cinéma', 'spectacle', 'artistique'],
    'Tourisme': ['industrie lourde', 'métallurgie', 'chimie'],
    'Restauration': ['industrie lourde', 'métallurgie', 'chimie'],
    'Numérique': ['agriculture', 'élevage', 'pêche', 'sylviculture', 'spectacle vivant'],
    'Télécommunications': ['agriculture', 'élevage', 'spectacle', 'cinéma'],
    'Édition': ['métallurgie', 'chimie', 'agriculture'],
    'Finance': ['musique', 'cinéma', 'spectacle', 'agricole', 'artisanat'],
    'Assurance': ['musique', 'cinéma', 'spectacle', 'agricole'],
    'Immobilier': ['musique', 'cinéma', 'spectacle', 'agricole'],
    'Conseil': ['musique', 'cinéma', 'spectacle', 'agricole'],
    'Ingénierie': ['musique', 'cinéma', 'spectacle', 'artistique'],
    'Santé': ['musique', 'cinéma', 'spectacle', 'agricole', 'industrie lourde'],
    'Social': ['industrie', 'manufacture', 'métallurgie'],
    'Santé animale': ['musique', 'cinéma', 'spectacle', 'industrie'],
    'Environnement': ['spectacle', 'cinéma', 'musique'],
    'Énergie': ['spectacle', 'cinéma', 'musique', 'artistique'],
}

# Phrases that, shortly before an exclusion word, mean the word is itself excluded
EXCLUSION_CONTEXT_PATTERNS: List[str] = ['sauf', 'hors', "à l'exception", 'excepté', 'exclu', 'non éligible']

SECTOR_INDICATOR_KEYWORDS: Dict[str, List[str]] = {
    'Agriculture': ['agricole', 'agriculture', 'élevage', 'exploitation agricole', 'filière agricole', 'pac', 'feader', 'rural', 'fermier', 'paysan', 'maraîcher', 'viticulture', 'arboriculture'],
    'Sylviculture': ['forestier', 'forêt', 'bois', 'sylviculture', 'filière bois', 'exploitation forestière'],
    'Pêche': ['pêche', 'pêcheur', 'aquaculture', 'maritime', 'conchyliculture', 'ostréiculture', 'feamp'],
    'Agroalimentaire': ['agroalimentaire', 'alimentaire', 'transformation alimentaire', 'iaa', 'food', 'agro-industrie'],
    'Textile': ['textile', 'habillement', 'confection', 'mode', 'couture', 'tissu', 'vêtement'],
    'Bois': ['bois', 'menuiserie', 'charpente', 'ébénisterie', 'biosourcé', 'filière bois', 'scierie'],
    'Papier': ['papier', 'carton', 'emballage', 'imprimerie', 'édition'],
    'Chimie': ['chimie', 'chimique', 'pétrochimie', 'produits chimiques'],
    'Pharmacie': ['pharmaceutique', 'pharmacie', 'médicament', 'biotech', 'biotechnologie', 'santé humaine'],
    'Plasturgie': ['plastique', 'plasturgie', 'caoutchouc', 'polymère', 'composite'],
    'Matériaux': ['matériaux', 'verre', 'céramique', 'béton', 'ciment', 'matériaux de construction'],
    'Métallurgie': ['métallurgie', 'métal', 'sidérurgie', 'fonderie', 'forge', 'usinage', 'chaudronnerie'],
    'Électronique': ['électronique', 'électrique', 'composant', 'semi-conducteur', 'microélectronique', 'capteur'],
    'Mécanique': ['mécanique', 'machine', 'équipement', 'outillage', 'robotique', 'automatisation'],
    'Automobile': ['automobile', 'véhicule', 'constructeur', 'équipementier', 'mobilité'],
    'Aéronautique': ['aéronautique', 'aérospatial', 'aviation', 'spatial', 'défense', 'naval'],
    'Ameublement': ['meuble', 'ameublement', 'mobilier', 'agencement'],
    'Industrie': ['industriel', 'industrie', 'manufacture', 'usine', 'production industrielle', 'atelier', 'fabrication'],
    'BTP': ['bâtiment', 'construction', 'travaux publics', 'btp', 'chantier', 'génie civil', 'rénovation', "maîtrise d'ouvrage"],
    'Commerce': ['commerce', 'commercial', 'retail', 'négoce', 'distribution', 'vente', 'détail', 'gros'],
    'Transport': ['transport', 'mobilité', 'fret', 'routier', 'ferroviaire', 'maritime', 'aérien', 'multimodal'],
    'Logistique': ['logistique', 'entreposage', 'supply chain', 'stockage', 'manutention'],
    'Tourisme': ['tourisme', 'touristique', 'hébergement', 'hôtellerie', 'camping', 'loisirs', 'accueil'],
    'Restauration': ['restauration', 'restaurant', 'traiteur', 'café', 'hôtellerie-restauration'],
    'Numérique': ['numérique', 'digital', 'logiciel', 'informatique', 'tech', 'startup', 'saas', 'cloud', 'data', 'ia', 'intelligence artificielle'],
    'Télécommunications': ['télécom', 'télécommunications', 'réseau', 'fibre', 'mobile', '5g'],
    'Édition': ['édition', 'éditeur', 'livre', 'presse', 'média'],
    'Audiovisuel': ['audiovisuel', 'cinéma', 'film', 'production audiovisuelle', 'musique', 'musical', 'jeux vidéo', 'animation'],
    'Finance': ['finance', 'financier', 'banque', 'bancaire', 'fintech', 'investissement'],
    'Assurance': ['assurance', 'assureur', 'mutuelle', 'prévoyance', 'insurtech'],
    'Immobilier': ['immobilier', 'foncier', 'promotion', 'gestion immobilière', 'proptech'],
    'Conseil': ['conseil', 'consulting', 'consultant', 'expertise', 'accompagnement', 'audit'],
    'Ingénierie': ['ingénierie', "bureau d'études", 'conception', 'architecture', 'bet'],
    'Design': ['design', 'création', 'graphisme', 'stylisme', 'designer'],
    'Communication': ['communication', 'publicité', 'marketing', 'agence', 'média', 'événementiel'],
    'RH': ['ressources humaines', 'recrutement', 'formation professionnelle', 'emploi', 'intérim'],
    'Santé': ['santé', 'médical', 'médecine', 'hospitalier', 'soins', 'ehpad', 'clinique'],
    'Social': ['social', 'médico-social', 'aide à domicile', 'handicap', 'insertion', 'ess'],
    'Santé animale': ['vétérinaire', 'animal', 'animalier', 'élevage'],
    'Culture': ['culture', 'culturel', 'artistique', 'art', 'patrimoine', 'musée', 'spectacle vivant'],
    'Sport': ['sport', 'sportif', 'équipement sportif', 'club', 'fédération'],
    'Environnement': ['environnement', 'écologie', 'déchet', 'recyclage', 'économie circulaire', 'biodiversité', 'eau'],
    'Énergie': ['énergie', 'énergétique', 'renouvelable', 'électricité', 'gaz', 'photovoltaïque', 'éolien', 'hydrogène', 'décarbonation'],
    'R&D': ['recherche', 'développement', 'r&d', 'innovation', 'laboratoire', 'brevet', 'expérimentation'],
    'Formation': ['formation', 'enseignement', 'éducation', 'apprentissage', 'compétences', 'école'],
    'Associatif': ['association', 'associatif', 'ong', 'fondation', 'bénévole'],
    'Sécurité': ['sécurité', 'surveillance', 'gardiennage', 'protection'],
    'Services': ['services', 'prestation', 'entreprise de services'],
}

# Matched as substrings of the profile's legal form, longest form first
LEGAL_FORM_TO_ENTITY: Dict[str, List[str]] = {
    'SA': ['Entreprise', 'PME', 'ETI', 'GE', 'Société', 'Société commerciale'],
    'SAS': ['Entreprise', 'PME', 'ETI', 'Startup', 'Société', 'Société commerciale'],
    'SASU': ['Entreprise', 'PME', 'TPE', 'Startup', 'Société', 'Société commerciale'],
    'SARL': ['Entreprise', 'PME', 'TPE', 'Société', 'Société commerciale'],
    'EURL': ['Entreprise', 'TPE', 'Société', 'Société commerciale'],
    'SARLU': ['Entreprise', 'TPE', 'Société', 'Société commerciale'],
    'SNC': ['Entreprise', 'PME', 'TPE', 'Société', 'Société de personnes'],
    'SCS': ['Entreprise', 'PME', 'Société', 'Société de personnes'],
    'SCA': ['Entreprise', 'PME', 'ETI', 'Société', 'Société de personnes'],
    'EI': ['Entreprise', 'TPE', 'Indépendant', 'Entrepreneur individuel'],
    'EIRL': ['Entreprise', 'TPE', 'Indépendant', 'Entrepreneur individuel'],
    'Auto-entrepreneur': ['Entreprise', 'TPE', 'Indépendant', 'Micro-entreprise', 'Travailleur indépendant'],
    'Micro-entreprise': ['Entreprise', 'TPE', 'Indépendant', 'Micro-entreprise', 'Travailleur indépendant'],
    'Profession libérale': ['Entreprise', 'TPE', 'Indépendant', 'Profession libérale', 'Travailleur indépendant'],
    'Artisan': ['Entreprise', 'TPE', 'Artisan', 'Indépendant', "Métiers d'art"],
    'Commerçant': ['Entreprise', 'TPE', 'Commerçant', 'Commerce'],
    'SCI': ['Société civile', 'Société civile immobilière', 'Immobilier'],
    'SCM': ['Société civile', 'Société civile de moyens', 'Profession libérale'],
    'SCP': ['Société civile', 'Société civile professionnelle', 'Profession libérale'],
    'SEL': ['Société', "Société d'exercice libéral", 'Profession libérale'],
    'SELARL': ['Société', "Société d'exercice libéral", 'Profession libérale'],
    'GAEC': ['Entreprise agricole', 'Exploitation agricole', 'Agriculture', 'Groupement agricole'],
    'EARL': ['Entreprise agricole', 'Exploitation agricole', 'Agriculture', 'TPE', 'PME'],
    'SCEA': ['Entreprise agricole', 'Exploitation agricole', 'Agriculture', 'Société civile'],
    'Exploitant agricole': ['Entreprise agricole', 'Exploitation agricole', 'Agriculture', 'TPE', 'Indépendant'],
    'SCOP': ['Entreprise', 'Coopérative', 'ESS', 'PME', 'Économie sociale et solidaire'],
    'SCIC': ['Entreprise', 'Coopérative', 'ESS', 'Économie sociale et solidaire', 'Intérêt collectif'],
    'Coopérative': ['Coopérative', 'ESS', 'Économie sociale et solidaire'],
    'Coopérative agricole': ['Coopérative', 'Agriculture', 'ESS', 'Coopérative agricole'],
    'CAE': ['Coopérative', "Coopérative d'activité et d'emploi", 'ESS', 'Entrepreneur salarié'],
    'Association': ['Association', 'Organisme à but non lucratif', 'OBNL', 'ESS'],
    'Association loi 1901': ['Association', 'Organisme à but non lucratif', 'OBNL', 'ESS'],
    'Fondation': ['Fondation', 'Organisme à but non lucratif', 'OBNL', 'Mécénat'],
    'Fonds de dotation': ['Fondation', 'Organisme à but non lucratif', 'OBNL', 'Mécénat'],
    'Mutuelle': ['Mutuelle', 'ESS', 'Organisme complémentaire', 'Économie sociale et solidaire'],
    'EPIC': ['Établissement public', 'Organisme public', 'EPIC'],
    'EPA': ['Établissement public', 'Organisme public', 'EPA'],
    'SEM': ["Société d'économie mixte", 'Organisme public', 'Collectivité'],
    'SPL': ['Société publique locale', 'Organisme public', 'Collectivité'],
    'GIP': ["Groupement d'intérêt public", 'Organisme public'],
    'Régie': ['Organisme public', 'Collectivité', 'Régie'],
    'GIE': ['Groupement', 'GIE', "Groupement d'intérêt économique", 'Entreprise'],
    'GEIE': ['Groupement', 'GEIE', "Groupement européen d'intérêt économique"],
    'Société européenne': ['Entreprise', 'Société européenne', 'PME', 'ETI', 'GE'],
    'Succursale': ['Entreprise', 'Succursale', 'Filiale'],
}

DEFAULT_ENTITY_TYPES: List[str] = ['Entreprise', 'PME', 'TPE']
FALLBACK_ENTITY_TYPES: List[str] = ['Entreprise']

STOP_WORDS = frozenset([
    'pour', 'avec', 'dans', 'sans', 'autre', 'plus', 'moins', 'très',
    'être', 'avoir', 'faire', 'tout', 'tous',
])

# Generic words that carry no matching signal in free-text descriptions
GENERIC_DESCRIPTION_WORDS = frozenset([
    'entreprise', 'société', 'activité', 'notre', 'votre', 'cette', 'leurs',
])

# (substring in certification, extra search terms)
CERTIFICATION_TERM_EXPANSIONS = [
    ('bio', ['bio', 'biologique']),
    ('hve', ['hve', 'haute valeur environnementale']),
    ('rge', ['rge', 'reconnu garant environnement']),
]

# (substrings in certification, thematic keywords)
CERTIFICATION_THEMES = [
    (('bio', 'biologique'), ['biologique', 'bio', 'agriculture biologique', 'conversion bio', 'label bio']),
    (('hve',), ['haute valeur environnementale', 'hve', 'certification environnementale']),
    (('iso 14001', 'iso14001'), ['environnement', 'management environnemental', 'certification iso']),
    (('rge',), ['rénovation énergétique', 'efficacité énergétique', 'rge']),
]

DESCRIPTION_THEMES = [
    (('construction', 'bâtiment'), ['construction', 'bâtiment', 'btp', 'travaux']),
    (('écologique', 'durable'), ['écologique', 'durable', 'environnement', 'vert']),
    (('transformation',), ['transformation', 'valorisation', 'filière']),
]

BUSINESS_ACTIVITY_THEMES = [
    (('construction', 'bâtiment', 'matériau'), ['construction', 'bâtiment', 'matériaux', 'btp']),
    (('bois', 'forestier', 'bambou'), ['bois', 'filière bois', 'forestier', 'biosourcé',
                                      'matériaux biosourcés', 'bois-construction', 'éco-matériaux']),
    (('énergie', 'renouvelable'), ['énergie', 'renouvelable', 'transition énergétique']),
]

SUSTAINABILITY_INITIATIVE_THEMES = [
    (('carbone',), ['carbone', 'bas carbone', 'neutralité carbone', 'décarbonation']),
    (('déchet', 'zéro'), ['déchets', 'économie circulaire', 'valorisation']),
]

PROJECT_TYPE_THEMES = [
    (('innov',), ['innovation']),
    (('export',), ['export', 'international']),
    (('embauche', 'recrutement'), ['emploi', 'recrutement']),
    (('formation',), ['formation', 'compétences']),
    (('écolog', 'environnement'), ['transition écologique']),
]

# (dimension, minimum score, keywords); every satisfied tier contributes
ENRICHMENT_SCORE_THEMES = [
    ('innovations', 50, ['innovation', 'r&d', 'recherche', 'développement']),
    ('innovations', 70, ['brevet', 'prototype', 'expérimentation', 'innovant']),
    ('sustainability', 50, ['environnement', 'transition écologique', 'rse', 'développement durable']),
    ('sustainability', 70, ['carbone', 'décarbonation', 'empreinte carbone', 'neutralité carbone', 'climat',
                            'prêt vert', 'financement vert', 'éco-prêt']),
    ('sustainability', 80, ['économie circulaire', 'recyclage', 'réemploi', 'biodiversité',
                            'industrie verte', 'transition industrielle', 'décarboner']),
    ('export', 50, ['export', 'international', 'développement international']),
    ('digital', 50, ['numérique', 'digital', 'transformation digitale']),
]
