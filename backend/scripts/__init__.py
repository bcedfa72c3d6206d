"""
scripts

Package utilitaire pour les scripts d’exploitation (CLI).

Rôle (fonctionnel) :
- Contient des scripts exécutables liés au projet, par exemple check_env
  (validation de la configuration sans démarrer l’API).

Note :
- Les scripts orchestrent et appellent les modules de `app/` : pas de logique centrale ici.
"""
