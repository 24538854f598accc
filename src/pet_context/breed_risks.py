"""
Breed-specific health risk data.

Each breed maps to the conditions it is predisposed to, with the typical
onset window in years. Used to sharpen the breed monitoring note in the
premium AI context.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BreedRisk:
    """A condition a breed is predisposed to."""

    name: str
    min_age: float
    max_age: float
    severity: str  # low, moderate, high
    description: str

    def applies_at(self, age_years: float) -> bool:
        return self.min_age <= age_years <= self.max_age


BREED_HEALTH_RISKS: dict[str, list[BreedRisk]] = {
    "Labrador Retriever": [
        BreedRisk("Hip Dysplasia", 1, 6, "high", "Abnormal hip joint development causing pain and stiffness."),
        BreedRisk("Elbow Dysplasia", 1, 4, "moderate", "Abnormal elbow development leading to lameness."),
        BreedRisk("Obesity", 2, 14, "moderate", "Tendency to gain weight, which strains joints and organs."),
        BreedRisk("Progressive Retinal Atrophy", 3, 9, "moderate", "Gradual vision loss from retinal degeneration."),
    ],
    "Golden Retriever": [
        BreedRisk("Hip Dysplasia", 1, 6, "high", "Abnormal hip joint development causing pain and stiffness."),
        BreedRisk("Cancer", 6, 14, "high", "Strong predisposition to hemangiosarcoma and lymphoma."),
        BreedRisk("Skin Allergies", 1, 10, "moderate", "Atopic dermatitis and environmental allergies."),
        BreedRisk("Heart Disease", 5, 12, "high", "Subvalvular aortic stenosis and related cardiac disease."),
    ],
    "German Shepherd": [
        BreedRisk("Hip Dysplasia", 1, 7, "high", "Abnormal hip joint development, very common in the breed."),
        BreedRisk("Degenerative Myelopathy", 7, 14, "high", "Progressive spinal cord disease weakening the hind limbs."),
        BreedRisk("Bloat (GDV)", 2, 12, "high", "Stomach dilation and twisting; a surgical emergency."),
        BreedRisk("Exocrine Pancreatic Insufficiency", 1, 5, "moderate", "Poor digestion from low pancreatic enzyme output."),
    ],
    "French Bulldog": [
        BreedRisk("Brachycephalic Obstructive Airway Syndrome", 0, 14, "high", "Narrowed airways causing noisy, labored breathing."),
        BreedRisk("Intervertebral Disc Disease", 3, 10, "high", "Disc herniation causing back pain or paralysis."),
        BreedRisk("Skin Fold Dermatitis", 0, 14, "moderate", "Infections in facial and body skin folds."),
        BreedRisk("Heat Sensitivity", 0, 14, "moderate", "Poor heat tolerance due to airway anatomy."),
    ],
    "Poodle": [
        BreedRisk("Addison's Disease", 2, 9, "high", "Adrenal insufficiency with vague, episodic signs."),
        BreedRisk("Epilepsy", 1, 5, "moderate", "Recurrent seizures, usually first seen in young adults."),
        BreedRisk("Progressive Retinal Atrophy", 3, 8, "moderate", "Gradual vision loss from retinal degeneration."),
        BreedRisk("Bloat (GDV)", 4, 12, "high", "Stomach dilation and twisting; a surgical emergency."),
    ],
    "Beagle": [
        BreedRisk("Epilepsy", 1, 6, "moderate", "Recurrent seizures, usually first seen in young adults."),
        BreedRisk("Hypothyroidism", 4, 10, "low", "Low thyroid output causing weight gain and lethargy."),
        BreedRisk("Intervertebral Disc Disease", 3, 8, "moderate", "Disc herniation causing back pain or paralysis."),
        BreedRisk("Cherry Eye", 0, 3, "low", "Prolapsed third-eyelid gland."),
    ],
    "Bulldog": [
        BreedRisk("Brachycephalic Obstructive Airway Syndrome", 0, 12, "high", "Flat face and narrow airways make breathing hard work."),
        BreedRisk("Hip Dysplasia", 1, 8, "high", "Hip joint malformation, very frequent in the breed."),
        BreedRisk("Skin Fold Dermatitis", 0, 12, "moderate", "Recurring infections in deep facial and body folds."),
        BreedRisk("Cherry Eye", 0, 3, "low", "Prolapsed third-eyelid gland."),
    ],
    "Rottweiler": [
        BreedRisk("Osteosarcoma", 5, 10, "high", "Aggressive bone cancer, often in the limbs."),
        BreedRisk("Hip Dysplasia", 1, 6, "high", "Hip joint malformation common in large breeds."),
        BreedRisk("Aortic Stenosis", 0, 4, "high", "Narrowed aortic outflow straining the heart."),
        BreedRisk("Cruciate Ligament Rupture", 2, 8, "moderate", "Torn knee ligament, frequent in heavy dogs."),
    ],
    "Dachshund": [
        BreedRisk("Intervertebral Disc Disease", 3, 8, "high", "Disc herniation causing back pain or paralysis."),
        BreedRisk("Obesity", 2, 14, "moderate", "Extra weight greatly increases spinal injury risk."),
        BreedRisk("Patellar Luxation", 1, 6, "moderate", "Kneecap dislocation causing intermittent skipping."),
        BreedRisk("Progressive Retinal Atrophy", 4, 10, "moderate", "Gradual vision loss from retinal degeneration."),
    ],
    "Siberian Husky": [
        BreedRisk("Cataracts", 1, 6, "moderate", "Inherited juvenile cataracts clouding the lens."),
        BreedRisk("Hip Dysplasia", 1, 7, "moderate", "Hip joint malformation at moderate rates."),
        BreedRisk("Hypothyroidism", 3, 8, "low", "Low thyroid output causing coat and energy changes."),
        BreedRisk("Corneal Dystrophy", 2, 6, "low", "Opaque deposits in the cornea that can blur vision."),
    ],
    "Boxer": [
        BreedRisk("Cancer", 5, 12, "high", "High rates of mast cell tumors and lymphoma."),
        BreedRisk("Aortic Stenosis", 0, 5, "high", "Narrowed aortic outflow straining the heart."),
        BreedRisk("Boxer Cardiomyopathy", 2, 10, "high", "Arrhythmias that can cause fainting or sudden death."),
        BreedRisk("Hip Dysplasia", 1, 6, "moderate", "Hip joint malformation at moderate rates."),
    ],
    "Great Dane": [
        BreedRisk("Bloat (GDV)", 1, 10, "high", "Stomach dilation and twisting; a surgical emergency."),
        BreedRisk("Dilated Cardiomyopathy", 3, 8, "high", "Enlarged, weakened heart muscle."),
        BreedRisk("Hip Dysplasia", 1, 5, "high", "Hip joint malformation made worse by giant size."),
        BreedRisk("Osteosarcoma", 5, 10, "high", "Aggressive bone cancer, often in the limbs."),
    ],
    "Doberman Pinscher": [
        BreedRisk("Dilated Cardiomyopathy", 3, 10, "high", "Enlarged, weakened heart muscle; very common in the breed."),
        BreedRisk("Von Willebrand's Disease", 0, 14, "moderate", "Inherited clotting disorder causing prolonged bleeding."),
        BreedRisk("Wobbler Syndrome", 3, 9, "high", "Neck vertebra instability causing a wobbly gait."),
        BreedRisk("Hip Dysplasia", 1, 6, "moderate", "Hip joint malformation at moderate rates."),
    ],
    "Bernese Mountain Dog": [
        BreedRisk("Histiocytic Sarcoma", 4, 10, "high", "Aggressive cancer with a strong breed predisposition."),
        BreedRisk("Hip Dysplasia", 1, 5, "high", "Hip joint malformation common in large breeds."),
        BreedRisk("Elbow Dysplasia", 1, 4, "moderate", "Abnormal elbow development leading to lameness."),
        BreedRisk("Bloat (GDV)", 2, 10, "high", "Stomach dilation and twisting; a surgical emergency."),
    ],
    "Cavalier King Charles Spaniel": [
        BreedRisk("Mitral Valve Disease", 1, 10, "high", "Degenerating heart valve leading to heart failure."),
        BreedRisk("Syringomyelia", 1, 6, "high", "Fluid cavities in the spinal cord from skull malformation."),
        BreedRisk("Patellar Luxation", 1, 6, "moderate", "Kneecap dislocation causing intermittent skipping."),
        BreedRisk("Keratoconjunctivitis Sicca", 2, 8, "low", "Dry eye needing lifelong lubrication or medication."),
    ],
}

_BY_LOWER_NAME = {breed.lower(): risks for breed, risks in BREED_HEALTH_RISKS.items()}


def get_breed_risks(breed: Optional[str]) -> list[BreedRisk]:
    """Look up breed risks case-insensitively. Unknown breeds return []."""
    if not breed or not isinstance(breed, str):
        return []
    return list(_BY_LOWER_NAME.get(breed.strip().lower(), []))


def risks_for_age(breed: Optional[str], age_years: Optional[float]) -> list[BreedRisk]:
    """Risks whose onset window covers the dog's age; all of them when the age is unknown."""
    risks = get_breed_risks(breed)
    if age_years is None:
        return risks
    return [risk for risk in risks if risk.applies_at(age_years)]
